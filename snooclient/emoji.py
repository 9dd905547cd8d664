"""Custom emoji endpoints for subreddits."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .client import Client, Response, check_response

KIND_SUBREDDIT = "t5"


@dataclass
class Emoji:
    """A graphic element usable in post and user flair."""

    name: str = ""
    url: str = ""
    user_flair_allowed: bool = False
    post_flair_allowed: bool = False
    mod_flair_only: bool = False
    # Full id of the user who created the emoji.
    created_by: str = ""

    @classmethod
    def from_json(cls, name: str, data: dict[str, Any]) -> "Emoji":
        return cls(
            name=name,
            url=data.get("url") or "",
            user_flair_allowed=bool(data.get("user_flair_allowed")),
            post_flair_allowed=bool(data.get("post_flair_allowed")),
            mod_flair_only=bool(data.get("mod_flair_only")),
            created_by=data.get("created_by") or "",
        )


def _emojis(data: Any) -> list[Emoji]:
    if not isinstance(data, dict):
        return []
    return [Emoji.from_json(name, value or {}) for name, value in data.items()]


@dataclass
class EmojiCreateOrUpdateRequest:
    """A request to create or update an emoji. Unset permissions are not sent."""

    name: str
    user_flair_allowed: bool | None = None
    post_flair_allowed: bool | None = None
    mod_flair_only: bool | None = None

    def validate(self) -> None:
        if not self.name:
            raise ValueError("EmojiCreateOrUpdateRequest.name: cannot be empty")

    def to_form(self) -> dict[str, Any]:
        form: dict[str, Any] = {"name": self.name}
        for key in ("user_flair_allowed", "post_flair_allowed", "mod_flair_only"):
            value = getattr(self, key)
            if value is not None:
                form[key] = value
        return form


def _validated(request: EmojiCreateOrUpdateRequest | None) -> EmojiCreateOrUpdateRequest:
    if request is None:
        raise ValueError("EmojiCreateOrUpdateRequest: cannot be None")
    request.validate()
    return request


class EmojiService:
    """Emoji endpoints of the API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get(self, subreddit: str) -> tuple[list[Emoji], list[Emoji]]:
        """Return the default emojis and those of the subreddit, respectively."""
        response = self.client.request("GET", f"api/v1/{subreddit}/emojis/all")
        root = response.data if isinstance(response.data, dict) else {}
        default = _emojis(root.get("snoomojis"))
        own = next(
            (_emojis(value) for key, value in root.items() if key.startswith(KIND_SUBREDDIT)),
            [],
        )
        return default, own

    def delete(self, subreddit: str, emoji: str) -> Response:
        """Delete the emoji from the subreddit."""
        return self.client.request("DELETE", f"api/v1/{subreddit}/emoji/{emoji}")

    def set_size(self, subreddit: str, height: int, width: int) -> Response:
        """Set the custom emoji size; both sides must be between 1 and 40."""
        return self.client.request(
            "POST",
            f"api/v1/{subreddit}/emoji_custom_size",
            form={"height": height, "width": width},
        )

    def disable_custom_size(self, subreddit: str) -> Response:
        return self.client.request("POST", f"api/v1/{subreddit}/emoji_custom_size")

    def _lease(self, subreddit: str, image_path: str) -> tuple[str, dict[str, str]]:
        mimetype = "image/png" if image_path.lower().endswith(".png") else "image/jpeg"
        response = self.client.request(
            "POST",
            f"api/v1/{subreddit}/emoji_asset_upload_s3.json",
            form={"filepath": image_path, "mimetype": mimetype},
        )
        lease = (response.data or {}).get("s3UploadLease") or {}
        upload_url = f"http:{lease.get('action') or ''}"
        fields = {item["name"]: item["value"] for item in lease.get("fields") or []}
        return upload_url, fields

    def upload(
        self,
        subreddit: str,
        request: EmojiCreateOrUpdateRequest | None,
        image_path: str,
    ) -> Response:
        """Upload an image file as an emoji of the subreddit."""
        request = _validated(request)
        upload_url, fields = self._lease(subreddit, image_path)
        with open(image_path, "rb") as image:
            # The storage service ignores fields after the file, so they go first.
            http_response = self.client.session.post(
                upload_url,
                data=fields,
                files={"file": (os.path.basename(image_path), image)},
            )
        check_response(http_response)
        form = request.to_form()
        form["s3_key"] = fields.get("key", "")
        return self.client.request("POST", f"api/v1/{subreddit}/emoji.json", form=form)

    def update(
        self, subreddit: str, request: EmojiCreateOrUpdateRequest | None
    ) -> Response:
        """Update an emoji's permissions in the subreddit."""
        request = _validated(request)
        return self.client.request(
            "POST", f"api/v1/{subreddit}/emoji_permissions", form=request.to_form()
        )