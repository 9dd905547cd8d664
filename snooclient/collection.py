"""Mod-curated collections of posts within a subreddit."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .client import Client, Response, parse_timestamp


@dataclass
class Collection:
    """A mod-curated group of posts within a subreddit."""

    id: str = ""
    created: datetime | None = None
    updated: datetime | None = None
    title: str = ""
    description: str = ""
    permalink: str = ""
    layout: str = ""
    subreddit_id: str = ""
    author: str = ""
    author_id: str = ""
    # Post at the top of the collection; absent when listing collections.
    primary_post_id: str = ""
    post_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Collection":
        return cls(
            id=data.get("collection_id") or "",
            created=parse_timestamp(data.get("created_at_utc")),
            updated=parse_timestamp(data.get("last_update_utc")),
            title=data.get("title") or "",
            description=data.get("description") or "",
            permalink=data.get("permalink") or "",
            layout=data.get("display_layout") or "",
            subreddit_id=data.get("subreddit_id") or "",
            author=data.get("author_name") or "",
            author_id=data.get("author_id") or "",
            primary_post_id=data.get("primary_link_id") or "",
            post_ids=list(data.get("link_ids") or []),
        )


@dataclass
class CollectionCreateRequest:
    """A request to create a collection. Layout is TIMELINE or GALLERY."""

    title: str
    subreddit_id: str
    description: str = ""
    layout: str = ""

    def to_form(self) -> dict[str, str]:
        form = {"title": self.title}
        if self.description:
            form["description"] = self.description
        form["sr_fullname"] = self.subreddit_id
        if self.layout:
            form["display_layout"] = self.layout
        return form


class CollectionService:
    """Collection endpoints of the API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _post(self, path: str, form: dict[str, Any]) -> Response:
        return self.client.request("POST", f"api/v1/collections/{path}", form=form)

    def get(self, collection_id: str) -> Collection:
        """Get a collection by its id."""
        response = self.client.request(
            "GET",
            "api/v1/collections/collection",
            params={"collection_id": collection_id, "include_links": False},
        )
        return Collection.from_json(response.data or {})

    def from_subreddit(self, subreddit_id: str) -> list[Collection]:
        """Get all collections in the subreddit with the given full id."""
        response = self.client.request(
            "GET",
            "api/v1/collections/subreddit_collections",
            params={"sr_fullname": subreddit_id},
        )
        return [Collection.from_json(item) for item in response.data or []]

    def create(self, request: CollectionCreateRequest | None) -> Collection:
        """Create a collection."""
        if request is None:
            raise ValueError("CollectionCreateRequest: cannot be None")
        response = self._post("create_collection", request.to_form())
        return Collection.from_json(response.data or {})

    def delete(self, collection_id: str) -> Response:
        return self._post("delete_collection", {"collection_id": collection_id})

    def add_post(self, post_id: str, collection_id: str) -> Response:
        """Add a post, by its full id, to a collection."""
        return self._post(
            "add_post_to_collection",
            {"link_fullname": post_id, "collection_id": collection_id},
        )

    def remove_post(self, post_id: str, collection_id: str) -> Response:
        """Remove a post, by its full id, from a collection."""
        return self._post(
            "remove_post_in_collection",
            {"link_fullname": post_id, "collection_id": collection_id},
        )

    def reorder_posts(self, collection_id: str, *args: str) -> Response:
        """Reorder the posts of a collection to the given full ids."""
        return self._post(
            "reorder_collection",
            {"collection_id": collection_id, "link_ids": ",".join(args)},
        )

    def update_title(self, collection_id: str, title: str) -> Response:
        return self._post(
            "update_collection_title", {"collection_id": collection_id, "title": title}
        )

    def update_description(self, collection_id: str, description: str) -> Response:
        return self._post(
            "update_collection_description",
            {"collection_id": collection_id, "description": description},
        )

    def update_layout_timeline(self, collection_id: str) -> Response:
        return self._post(
            "update_collection_display_layout",
            {"collection_id": collection_id, "display_layout": "TIMELINE"},
        )

    def update_layout_gallery(self, collection_id: str) -> Response:
        return self._post(
            "update_collection_display_layout",
            {"collection_id": collection_id, "display_layout": "GALLERY"},
        )

    def follow(self, collection_id: str) -> Response:
        return self._post("follow_collection", {"collection_id": collection_id, "follow": True})

    def unfollow(self, collection_id: str) -> Response:
        return self._post("follow_collection", {"collection_id": collection_id, "follow": False})