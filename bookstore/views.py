from . import schemas, services
from .view import GenericServiceView

# -----------------------------------------------------------------------------


class AuthorViewBase(GenericServiceView):
    service_class = services.AuthorService
    schema = schemas.author_schema


class AuthorListView(AuthorViewBase):
    def get(self):
        return self.list()

    def post(self):
        return self.create()


class AuthorView(AuthorViewBase):
    def get(self, id):
        return self.retrieve(id)

    def put(self, id):
        return self.update(id)

    def patch(self, id):
        return self.update(id)

    def delete(self, id):
        return self.destroy(id)


class BookViewBase(GenericServiceView):
    service_class = services.BookService
    schema = schemas.book_schema


class BookListView(BookViewBase):
    def get(self):
        return self.list()

    def post(self):
        return self.create()


class BookView(BookViewBase):
    def get(self, id):
        return self.retrieve(id)

    def put(self, id):
        return self.update(id)

    def patch(self, id):
        return self.update(id)

    def delete(self, id):
        return self.destroy(id)
