"""Example FastAPI app serving SQLAlchemy objects as JSON:API documents.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload
"""
from __future__ import annotations

import os
import sys

from fastapi import FastAPI
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jsonapi_transformer import (  # noqa: E402
    JSONAPIResponse,
    JSONAPITransformer,
    ResourceMapping,
    ValueTreeSerializer,
)
from jsonapi_transformer.middleware import ErrorHandlerMiddleware  # noqa: E402

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User")
    comments = relationship("Comment")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"))
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User")


def type_key(model: type) -> str:
    return f"{model.__module__}.{model.__qualname__}"


MAPPINGS = [
    ResourceMapping(
        class_name=type_key(User),
        alias="users",
        id_properties=["id"],
        resource_url="/api/v1/users/{id}",
        hidden_properties=["email"],
    ),
    ResourceMapping(
        class_name=type_key(Article),
        alias="articles",
        id_properties=["id"],
        resource_url="/api/v1/articles/{id}",
        self_url="/api/v1/articles",
        hidden_properties=["author_id"],
    ),
    ResourceMapping(
        class_name=type_key(Comment),
        alias="comments",
        id_properties=["id"],
        resource_url="/api/v1/comments/{id}",
        hidden_properties=["article_id", "author_id"],
        relationships={"meta": {"source": "comment"}},
    ),
]


def build_articles() -> dict[int, Article]:
    """Return in-memory example articles keyed by id."""
    jane = User(id=1, name="Jane Doe", email="jane.doe@example.com")
    john = User(id=2, name="John Smith", email="john.smith@example.com")
    articles = [
        Article(
            id=1,
            title="JSON:API with FastAPI",
            body="An example article using JSON:API patterns.",
            author=jane,
            comments=[
                Comment(id=1, body="Great article!", author=john),
                Comment(id=2, body="Helpful examples.", author=jane),
            ],
        ),
        Article(
            id=2,
            title="Nested includes explained",
            body="How nested resources end up in included.",
            author=john,
            comments=[],
        ),
    ]
    return {article.id: article for article in articles}


ARTICLES = build_articles()

transformer = (
    JSONAPITransformer(MAPPINGS)
    .set_api_version("1.1")
    .add_meta("generator", "jsonapi-transformer example")
)
serializer = ValueTreeSerializer()

app = FastAPI(
    title="JSON:API Transformer Example",
    description="Example API serving transformed value trees.",
    version="0.1.0",
)
app.add_middleware(ErrorHandlerMiddleware)


@app.get("/api/v1/articles", response_class=JSONAPIResponse)
async def list_articles() -> JSONAPIResponse:
    document = transformer.transform(serializer.serialize(list(ARTICLES.values())))
    return JSONAPIResponse(document)


@app.get("/api/v1/articles/{article_id}", response_class=JSONAPIResponse)
async def get_article(article_id: int) -> JSONAPIResponse:
    article = ARTICLES.get(article_id)
    if article is None:
        return JSONAPIResponse(
            {"errors": [{"status": "404", "title": "Not Found"}]}, status_code=404
        )
    return JSONAPIResponse(transformer.transform(serializer.serialize(article)))
