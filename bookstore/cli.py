"""Terminal views over the catalog API.

Each command is a screen: ``list`` and ``show`` render records, ``create``
and ``edit`` are forms, and ``delete`` asks before removing anything. All of
them go through :py:class:`bookstore.client.CatalogClient`.
"""
import click
import functools

from .client import DEFAULT_URL, CatalogClient, CatalogClientError

# -----------------------------------------------------------------------------


def handle_client_errors(func):
    """Report API errors as a failed command rather than a traceback."""

    @functools.wraps(func)
    def wrapped(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CatalogClientError as e:
            raise click.ClickException(e.message) from e

    return wrapped


def pass_client(func):
    return click.pass_obj(handle_client_errors(func))


def echo_author_row(author):
    books = author.get("books") or ()
    click.echo(
        "{:>5}  {}  ({} {})".format(
            author["id"],
            author["name"],
            len(books),
            "book" if len(books) == 1 else "books",
        )
    )


def echo_book_row(book):
    author = book.get("author") or {}
    click.echo(
        "{:>5}  {} ({}) by {}".format(
            book["id"],
            book["title"],
            book["publishedYear"],
            author.get("name", f"author {book['authorId']}"),
        )
    )


def collect_changes(**fields):
    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        raise click.UsageError("Nothing to update.")

    return changes


# -----------------------------------------------------------------------------


@click.group(help="Browse and edit the bookstore catalog.")
@click.option(
    "--url",
    envvar="BOOKSTORE_URL",
    default=DEFAULT_URL,
    show_default=True,
    help="Root URL of the catalog server.",
)
@click.pass_context
def cli(ctx, url):
    # Tests hand in a client of their own.
    if ctx.obj is None:
        ctx.obj = ctx.with_resource(CatalogClient(url))


# Authors ---------------------------------------------------------------------


@cli.group(help="Manage authors.")
def authors():
    pass


@authors.command("list", help="List authors, newest first.")
@pass_client
def list_authors(client):
    items = client.list_authors()
    if not items:
        click.echo("No authors yet.")
        return

    for author in items:
        echo_author_row(author)


@authors.command("show", help="Show an author and their books.")
@click.argument("id", type=int)
@pass_client
def show_author(client, id):
    author = client.get_author(id)

    click.secho(author["name"], bold=True)
    click.echo(author["bio"])
    click.echo(f"Added {author['createdAt']}")

    books = author.get("books") or ()
    if not books:
        click.echo("No books.")
        return

    click.echo("Books:")
    for book in books:
        click.echo(f"  - {book['title']} ({book['publishedYear']})")


@authors.command("create", help="Add an author.")
@click.option("--name", prompt=True)
@click.option("--bio", prompt=True)
@pass_client
def create_author(client, name, bio):
    author = client.create_author({"name": name, "bio": bio})
    click.echo(f"Created author {author['id']}.")


@authors.command("edit", help="Change an author's name or bio.")
@click.argument("id", type=int)
@click.option("--name")
@click.option("--bio")
@pass_client
def edit_author(client, id, name, bio):
    changes = collect_changes(name=name, bio=bio)
    author = client.update_author(id, changes)
    click.echo(f"Updated author {author['id']}.")


@authors.command("delete", help="Delete an author and all their books.")
@click.argument("id", type=int)
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@pass_client
def delete_author(client, id, yes):
    if not yes:
        click.confirm(
            f"Delete author {id} and all their books?", abort=True
        )

    client.delete_author(id)
    click.echo(f"Deleted author {id}.")


# Books -----------------------------------------------------------------------


@cli.group(help="Manage books.")
def books():
    pass


@books.command("list", help="List books, newest first.")
@pass_client
def list_books(client):
    items = client.list_books()
    if not items:
        click.echo("No books yet.")
        return

    for book in items:
        echo_book_row(book)


@books.command("show", help="Show a book.")
@click.argument("id", type=int)
@pass_client
def show_book(client, id):
    book = client.get_book(id)

    click.secho(book["title"], bold=True)
    author = book.get("author") or {}
    click.echo(f"by {author.get('name', book['authorId'])}")
    click.echo(f"Published {book['publishedYear']}")
    click.echo(book["description"])


@books.command("create", help="Add a book.")
@click.option("--title", prompt=True)
@click.option("--author-id", type=int, prompt="Author ID")
@click.option("--description", prompt=True)
@click.option("--published-year", type=int, prompt="Published year")
@pass_client
def create_book(client, title, author_id, description, published_year):
    book = client.create_book(
        {
            "title": title,
            "authorId": author_id,
            "description": description,
            "publishedYear": published_year,
        }
    )
    click.echo(f"Created book {book['id']}.")


@books.command("edit", help="Change a book's details.")
@click.argument("id", type=int)
@click.option("--title")
@click.option("--author-id", type=int)
@click.option("--description")
@click.option("--published-year", type=int)
@pass_client
def edit_book(client, id, title, author_id, description, published_year):
    changes = collect_changes(
        title=title,
        authorId=author_id,
        description=description,
        publishedYear=published_year,
    )
    book = client.update_book(id, changes)
    click.echo(f"Updated book {book['id']}.")


@books.command("delete", help="Delete a book.")
@click.argument("id", type=int)
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@pass_client
def delete_book(client, id, yes):
    if not yes:
        click.confirm(f"Delete book {id}?", abort=True)

    client.delete_book(id)
    click.echo(f"Deleted book {id}.")
