import flask
import marshmallow
from flask.views import MethodView

from .exceptions import ValidationError
from .utils import settable_property

# -----------------------------------------------------------------------------


class ApiView(MethodView):
    """Base class for views that expose API endpoints.

    `ApiView` extends :py:class:`flask.views.MethodView` with functionality to
    load request bodies and dump response bodies with marshmallow. Request and
    response bodies are bare JSON values, with no envelope.
    """

    #: The :py:class:`marshmallow.Schema` for serialization and
    #: deserialization.
    schema = None

    def serialize(self, item, **kwargs):
        """Dump an item using the :py:attr:`serializer`.

        Any provided `**kwargs` will be passed to
        :py:meth:`marshmallow.Schema.dump`.

        :param object item: The object to serialize
        :return: The serialized object
        :rtype: dict
        """
        return self.serializer.dump(item, **kwargs)

    @settable_property
    def serializer(self):
        """The :py:class:`marshmallow.Schema` for serialization.

        By default, this is :py:attr:`ApiView.schema`.
        """
        return self.schema

    def make_items_response(self, items, *args):
        """Build a response for a sequence of multiple items.

        :param list items: The objects to serialize into the response body.
        :return: The HTTP response
        :rtype: :py:class:`flask.Response`
        """
        data_out = self.serialize(items, many=True)
        return self.make_response(data_out, *args, items=items)

    def make_item_response(self, item, *args):
        """Build a response for a single item.

        If the response status code is 201, then it will also include a
        ``Location`` header with the canonical URL of the item.

        :param object item: The object to serialize into the response body.
        :return: The HTTP response
        :rtype: :py:class:`flask.Response`
        """
        data_out = self.serialize(item)
        response = self.make_response(data_out, *args, item=item)

        if response.status_code == 201:
            response.headers["Location"] = self.get_location(item)

        return response

    def make_response(self, data, *args, **kwargs):
        return self.make_raw_response(flask.jsonify(data), *args, **kwargs)

    def make_raw_response(self, *args, **kwargs):
        """Convenience method for creating a :py:class:`flask.Response`.

        Any supplied keyword arguments are defined as attributes on the
        response object itself.
        """
        response = flask.make_response(*args)
        for key, value in kwargs.items():
            setattr(response, key, value)
        return response

    def make_empty_response(self, **kwargs):
        return self.make_raw_response("", 204, **kwargs)

    def make_created_response(self, item):
        return self.make_item_response(item, 201)

    def get_location(self, item):
        return flask.url_for(flask.request.endpoint, _method="GET", id=item.id)

    def get_request_data(self, **kwargs):
        """Parse and load the body of the current request.

        Any provided `**kwargs` will be passed to
        :py:meth:`marshmallow.Schema.load`.

        :return: The deserialized request data
        :rtype: dict
        :raises ValidationError: If the body is missing or invalid.
        """
        data_raw = self.parse_request_data()
        return self.deserialize(data_raw, **kwargs)

    def parse_request_data(self):
        data_raw = flask.request.get_json(silent=True)
        if not isinstance(data_raw, dict):
            raise ValidationError("Request body must be a JSON object")

        return data_raw

    def deserialize(self, data_raw, **kwargs):
        try:
            return self.deserializer.load(data_raw, **kwargs)
        except marshmallow.ValidationError as e:
            raise ValidationError.from_schema_error(e) from e

    @settable_property
    def deserializer(self):
        """The :py:class:`marshmallow.Schema` for deserialization.

        By default, this is :py:attr:`ApiView.schema`.
        """
        return self.schema


class ServiceView(ApiView):
    """Base class for API views backed by a catalog service.

    The service is built per view instance from the request-scoped
    Flask-SQLAlchemy session.
    """

    #: A :py:class:`CatalogService` subclass.
    service_class = None

    @settable_property
    def session(self):
        """Convenience property for the current SQLAlchemy session."""
        return flask.current_app.extensions["sqlalchemy"].session

    @settable_property
    def service(self):
        return self.service_class(self.session)


class GenericServiceView(ServiceView):
    """Base class for API views implementing CRUD methods.

    In simple APIs, view classes will extend `GenericServiceView` and declare
    methods that immediately call the methods here::

        class AuthorListView(AuthorViewBase):
            def get(self):
                return self.list()

            def post(self):
                return self.create()
    """

    def list(self):
        items = self.service.list()
        return self.make_items_response(items)

    def retrieve(self, id):
        item = self.service.get(id)
        return self.make_item_response(item)

    def create(self):
        data_in = self.get_request_data()

        item = self.service.create(data_in)
        return self.make_created_response(item)

    def update(self, id, *, partial=True):
        """Update the item for the specified ID with the request data.

        The body is validated before the item is looked up, so an invalid
        body is reported even for an unknown ID.

        :param id: The item ID.
        :param bool partial: If set, fields omitted from the body are left
            unchanged.
        :return: An HTTP 200 response.
        :rtype: :py:class:`flask.Response`
        """
        data_in = self.get_request_data(partial=partial)

        item = self.service.update(id, data_in)
        return self.make_item_response(item)

    def destroy(self, id):
        self.service.delete(id)
        return self.make_empty_response()
