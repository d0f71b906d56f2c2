"""
Example 01: Validating a Mapping Model

This example declares a small blog model, validates it, then breaks a
bidirectional association to show the error report.
"""

from dataclasses import dataclass, field
from typing import Optional

from row_schema import MetadataRegistry, SchemaValidator, entity


@dataclass
class User:
    """User entity"""
    id: int
    name: str
    posts: list = field(default_factory=list)


@dataclass
class Post:
    """Post entity"""
    id: int
    title: str
    views: int
    author: Optional[User] = None


def build_model(inversed_by: str):
    user = (
        entity("blog.User", User)
        .id("id")
        .field("name", "string")
        .one_to_many("posts", "blog.Post", mapped_by="author", order_by={"title": "ASC"})
        .build()
    )
    post = (
        entity("blog.Post", Post)
        .id("id")
        .field("title", "string")
        .field("views", "string")  # int attribute mapped to a string column
        .many_to_one("author", "blog.User", inversed_by=inversed_by)
        .build()
    )
    return MetadataRegistry([user, post])


def main():
    print("=== Mapping Validation ===\n")

    print("1. Consistent associations, one type mismatch:")
    validator = SchemaValidator(build_model(inversed_by="posts"))
    report = validator.validate_mapping()
    for class_name, errors in report.items():
        for error in errors:
            print(f"   [{class_name}] {error}")
    print()

    print("2. Broken inverse side:")
    validator = SchemaValidator(build_model(inversed_by="articles"))
    report = validator.validate_mapping()
    for class_name, errors in report.items():
        for error in errors:
            print(f"   [{class_name}] {error}")
    print()


if __name__ == "__main__":
    main()
