"""SQLAdmin model views."""

from sqladmin import ModelView

from movieapp.models.movie import Movie
from movieapp.models.review import Review
from movieapp.models.user import User


class MovieAdmin(ModelView, model=Movie):
    column_list = [
        Movie.id,
        Movie.title,
        Movie.release_date,
        Movie.vote_average,
        Movie.popularity,
        Movie.synced_at,
    ]
    column_searchable_list = [Movie.title]
    column_sortable_list = [Movie.title, Movie.release_date, Movie.synced_at]
    # Rows are owned by the TMDb sync
    can_create = False
    can_edit = False


class ReviewAdmin(ModelView, model=Review):
    column_list = [
        Review.id,
        Review.movie_id,
        Review.user_id,
        Review.rating,
        Review.created_at,
    ]
    column_searchable_list = [Review.user_id]
    column_sortable_list = [Review.created_at, Review.rating]
    can_create = False
    can_edit = False


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.email, User.username, User.external_id, User.created_at]
    column_searchable_list = [User.email, User.username]
    column_sortable_list = [User.email, User.created_at]
    can_create = False
    can_delete = False
