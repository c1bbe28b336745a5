from setuptools import setup

EXTRAS_REQUIRE = {
    "tests": ("coverage", "psycopg2-binary", "pytest"),
}
EXTRAS_REQUIRE["dev"] = EXTRAS_REQUIRE["tests"] + ("tox",)

setup(
    name="bookstore-catalog",
    version="1.0.0",
    description="REST API and terminal client for a bookstore catalog",
    license="MIT",
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Framework :: Flask",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    keywords="rest flask bookstore",
    packages=("bookstore",),
    install_requires=(
        "click>=8.0",
        "Flask>=2.2",
        "Flask-SQLAlchemy>=3.0",
        "httpx>=0.23",
        "konch>=4.0",
        "marshmallow>=3.13.0",
        "SQLAlchemy>=1.4.0",
        "Werkzeug>=2.2",
    ),
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        "console_scripts": ("bookstore = bookstore.cli:cli",),
        "pytest11": ("bookstore = bookstore.testing",),
        "flask.commands": ("shell = bookstore.shell:cli",),
    },
)
