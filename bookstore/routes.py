from . import views

# -----------------------------------------------------------------------------


def register_routes(api):
    api.add_resource("/authors", views.AuthorListView, views.AuthorView)
    api.add_resource("/books", views.BookListView, views.BookView)
    api.add_health("/health")
