"""SQLAdmin model views."""

from sqladmin import ModelView

from cinearchive.models import Country, Director, Film, Genre, Keyword


class FilmAdmin(ModelView, model=Film):
    column_list = [
        Film.id,
        Film.title,
        Film.release_date,
        Film.type,
        Film.directors,
        Film.genres,
        Film.boost,
        Film.created_at,
    ]
    column_searchable_list = [Film.title]
    column_sortable_list = [Film.title, Film.release_date, Film.created_at]
    column_default_sort = [(Film.created_at, True)]
    form_excluded_columns = [Film.created_at, Film.updated_at]


class DirectorAdmin(ModelView, model=Director):
    column_list = [Director.id, Director.name]
    column_searchable_list = [Director.name]
    column_sortable_list = [Director.name]
    form_columns = [Director.name]


class CountryAdmin(ModelView, model=Country):
    name_plural = "Countries"
    column_list = [Country.id, Country.name, Country.code]
    column_searchable_list = [Country.name]
    column_sortable_list = [Country.name]
    form_columns = [Country.name, Country.code]


class GenreAdmin(ModelView, model=Genre):
    column_list = [Genre.id, Genre.name]
    column_searchable_list = [Genre.name]
    column_sortable_list = [Genre.name]
    form_columns = [Genre.name]


class KeywordAdmin(ModelView, model=Keyword):
    column_list = [Keyword.id, Keyword.name]
    column_searchable_list = [Keyword.name]
    column_sortable_list = [Keyword.name]
    form_columns = [Keyword.name]


ADMIN_VIEWS = [FilmAdmin, DirectorAdmin, CountryAdmin, GenreAdmin, KeywordAdmin]
