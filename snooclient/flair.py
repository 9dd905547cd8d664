"""Flair endpoints: user and post flair, flair templates and selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from .client import Client, Response

USER_FLAIR = "USER_FLAIR"
LINK_FLAIR = "LINK_FLAIR"


@dataclass
class Flair:
    """A tag that can be attached to a user or a post."""

    id: str = ""
    type: str = ""
    text: str = ""
    color: str = ""
    background_color: str = ""
    css_class: str = ""
    editable: bool = False
    mod_only: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Flair":
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            text=data.get("text") or "",
            color=data.get("text_color") or "",
            background_color=data.get("background_color") or "",
            css_class=data.get("css_class") or "",
            editable=bool(data.get("text_editable")),
            mod_only=bool(data.get("mod_only")),
        )


@dataclass
class FlairSummary:
    """The flair assigned to one user."""

    user: str = ""
    text: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairSummary":
        return cls(
            user=data.get("user") or "",
            text=data.get("flair_text") or "",
            css_class=data.get("flair_css_class") or "",
        )


@dataclass
class FlairChoice:
    """A flair that can be selected for oneself or for a post."""

    template_id: str = ""
    text: str = ""
    editable: bool = False
    position: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairChoice":
        return cls(
            template_id=data.get("flair_template_id") or "",
            text=data.get("flair_text") or "",
            editable=bool(data.get("flair_text_editable")),
            position=data.get("flair_position") or "",
            css_class=data.get("flair_css_class") or "",
        )


def _set_values(pairs: Sequence[tuple[str, Any]]) -> dict[str, Any]:
    """Keep the pairs whose value is neither ``None`` nor an empty string."""
    return {key: value for key, value in pairs if value is not None and value != ""}


@dataclass
class FlairConfigureRequest:
    """Subreddit flair settings. Unset settings may change unexpectedly, so set all."""

    user_flair_enabled: bool | None = None
    # One of: left, right.
    user_flair_position: str = ""
    user_flair_self_assign_enabled: bool | None = None
    # One of: none, left, right.
    post_flair_position: str = ""
    post_flair_self_assign_enabled: bool | None = None

    def to_form(self) -> dict[str, Any]:
        return _set_values(
            [
                ("flair_enabled", self.user_flair_enabled),
                ("flair_position", self.user_flair_position),
                ("flair_self_assign_enabled", self.user_flair_self_assign_enabled),
                ("link_flair_position", self.post_flair_position),
                ("link_flair_self_assign_enabled", self.post_flair_self_assign_enabled),
            ]
        )


@dataclass
class FlairTemplateCreateOrUpdateRequest:
    """A flair template to create, or to update when ``id`` names an existing one."""

    id: str = ""
    # One of: all, emoji, text.
    allowable_content: str = ""
    # No longer than 64 characters.
    text: str = ""
    # One of: light, dark.
    text_color: str = ""
    text_editable: bool | None = None
    mod_only: bool | None = None
    # Between 1 and 10 (inclusive).
    max_emojis: int | None = None
    # One of: none, transparent, or a 6-digit hex colour such as #AABBCC.
    background_color: str = ""
    css_class: str = ""

    def to_form(self) -> dict[str, Any]:
        return _set_values(
            [
                ("flair_template_id", self.id),
                ("allowable_content", self.allowable_content),
                ("text", self.text),
                ("text_color", self.text_color),
                ("text_editable", self.text_editable),
                ("mod_only", self.mod_only),
                ("max_emojis", self.max_emojis),
                ("background_color", self.background_color),
                ("css_class", self.css_class),
            ]
        )


@dataclass
class FlairTemplate:
    """A flair template usable next to usernames (USER_FLAIR) or posts (LINK_FLAIR)."""

    id: str = ""
    type: str = ""
    mod_only: bool = False
    allowable_content: str = ""
    text: str = ""
    text_type: str = ""
    text_color: str = ""
    text_editable: bool = False
    rich_text: list[dict[str, str]] = field(default_factory=list)
    override_css: bool = False
    max_emojis: int = 0
    background_color: str = ""
    css_class: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairTemplate":
        return cls(
            id=data.get("id") or "",
            type=data.get("flairType") or "",
            mod_only=bool(data.get("modOnly")),
            allowable_content=data.get("allowableContent") or "",
            text=data.get("text") or "",
            text_type=data.get("type") or "",
            text_color=data.get("textColor") or "",
            text_editable=bool(data.get("textEditable")),
            rich_text=[dict(item) for item in data.get("richtext") or []],
            override_css=bool(data.get("overrideCss")),
            max_emojis=int(data.get("maxEmojis") or 0),
            background_color=data.get("backgroundColor") or "",
            css_class=data.get("cssClass") or "",
        )


@dataclass
class FlairSelectRequest:
    """A flair template to select, with optional text if the flair is editable."""

    id: str = ""
    # No longer than 64 characters.
    text: str = ""

    def to_form(self) -> dict[str, Any]:
        return _set_values([("flair_template_id", self.id), ("text", self.text)])


@dataclass
class FlairChangeRequest:
    """A change of one user's flair; empty text and class clear the flair."""

    user: str
    text: str = ""
    css_class: str = ""


@dataclass
class FlairChangeResponse:
    """The outcome of one flair change."""

    ok: bool = False
    status: str = ""
    warnings: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FlairChangeResponse":
        return cls(
            ok=bool(data.get("ok")),
            status=data.get("status") or "",
            warnings=dict(data.get("warnings") or {}),
            errors=dict(data.get("errors") or {}),
        )


def _csv_field(value: str) -> str:
    needs_quotes = value != "" and (
        value == "\\."
        or any(char in value for char in ',"\r\n')
        or value[0].isspace()
    )
    if not needs_quotes:
        return value
    return '"' + value.replace('"', '""') + '"'


def _flair_csv(requests: Sequence[FlairChangeRequest]) -> str:
    return "".join(
        ",".join(_csv_field(value) for value in (r.user, r.text, r.css_class)) + "\n"
        for r in requests
    )


def _require(request: Any, name: str) -> None:
    if request is None:
        raise ValueError(f"{name}: cannot be None")


class FlairService:
    """Flair endpoints of the API."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _flairs(self, path: str) -> list[Flair]:
        response = self.client.request("GET", path)
        return [Flair.from_json(item) for item in response.data or []]

    def get_user_flairs(self, subreddit: str) -> list[Flair]:
        """Return the user flairs of the subreddit."""
        return self._flairs(f"r/{subreddit}/api/user_flair_v2")

    def get_post_flairs(self, subreddit: str) -> list[Flair]:
        """Return the post flairs of the subreddit."""
        return self._flairs(f"r/{subreddit}/api/link_flair_v2")

    def list_user_flairs(self, subreddit: str) -> list[FlairSummary]:
        """Return the flairs of individual users in the subreddit."""
        response = self.client.request("GET", f"r/{subreddit}/api/flairlist")
        data = response.data if isinstance(response.data, dict) else {}
        return [FlairSummary.from_json(item) for item in data.get("users") or []]

    def configure(self, subreddit: str, request: FlairConfigureRequest | None) -> Response:
        """Configure the subreddit's flair settings."""
        _require(request, "FlairConfigureRequest")
        form = request.to_form()
        form["api_type"] = "json"
        return self.client.request("POST", f"r/{subreddit}/api/flairconfig", form=form)

    def _set_enabled(self, subreddit: str, enabled: bool) -> Response:
        return self.client.request(
            "POST",
            f"r/{subreddit}/api/setflairenabled",
            form={"api_type": "json", "flair_enabled": enabled},
        )

    def enable(self, subreddit: str) -> Response:
        """Enable your flair in the subreddit."""
        return self._set_enabled(subreddit, True)

    def disable(self, subreddit: str) -> Response:
        """Disable your flair in the subreddit."""
        return self._set_enabled(subreddit, False)

    def _upsert_template(
        self,
        subreddit: str,
        request: FlairTemplateCreateOrUpdateRequest | None,
        flair_type: str,
    ) -> FlairTemplate:
        _require(request, "FlairTemplateCreateOrUpdateRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["flair_type"] = flair_type
        response = self.client.request(
            "POST", f"r/{subreddit}/api/flairtemplate_v2", form=form
        )
        return FlairTemplate.from_json(response.data or {})

    def upsert_user_template(
        self, subreddit: str, request: FlairTemplateCreateOrUpdateRequest | None
    ) -> FlairTemplate:
        """Create or update a user flair template and return it."""
        return self._upsert_template(subreddit, request, USER_FLAIR)

    def upsert_post_template(
        self, subreddit: str, request: FlairTemplateCreateOrUpdateRequest | None
    ) -> FlairTemplate:
        """Create or update a post flair template and return it."""
        return self._upsert_template(subreddit, request, LINK_FLAIR)

    def delete(self, subreddit: str, username: str) -> Response:
        """Delete the flair of the user."""
        return self.client.request(
            "POST",
            f"r/{subreddit}/api/deleteflair",
            form={"api_type": "json", "name": username},
        )

    def delete_template(self, subreddit: str, template_id: str) -> Response:
        """Delete the flair template with the given id."""
        return self.client.request(
            "POST",
            f"r/{subreddit}/api/deleteflairtemplate",
            form={"api_type": "json", "flair_template_id": template_id},
        )

    def _clear_templates(self, subreddit: str, flair_type: str) -> Response:
        return self.client.request(
            "POST",
            f"r/{subreddit}/api/clearflairtemplates",
            form={"api_type": "json", "flair_type": flair_type},
        )

    def delete_all_user_templates(self, subreddit: str) -> Response:
        return self._clear_templates(subreddit, USER_FLAIR)

    def delete_all_post_templates(self, subreddit: str) -> Response:
        return self._clear_templates(subreddit, LINK_FLAIR)

    def _reorder(self, subreddit: str, flair_type: str, ids: Sequence[str]) -> Response:
        return self.client.request(
            "PATCH",
            f"api/v1/{subreddit}/flair_template_order/{flair_type}",
            json_body=list(ids),
        )

    def reorder_user_templates(self, subreddit: str, ids: Sequence[str]) -> Response:
        """Reorder user flair templates; every template id must be given."""
        return self._reorder(subreddit, USER_FLAIR, ids)

    def reorder_post_templates(self, subreddit: str, ids: Sequence[str]) -> Response:
        """Reorder post flair templates; every template id must be given."""
        return self._reorder(subreddit, LINK_FLAIR, ids)

    def _choices(
        self, path: str, form: dict[str, Any]
    ) -> tuple[list[FlairChoice], FlairChoice | None]:
        response = self.client.request("POST", path, form=form)
        data = response.data if isinstance(response.data, dict) else {}
        choices = [FlairChoice.from_json(item) for item in data.get("choices") or []]
        current = data.get("current")
        return choices, FlairChoice.from_json(current) if current else None

    def choices(self, subreddit: str) -> tuple[list[FlairChoice], FlairChoice | None]:
        """Return the flairs you can assign yourself in the subreddit, and your current one."""
        return self.choices_of(subreddit, self.client.username)

    def choices_of(
        self, subreddit: str, username: str
    ) -> tuple[list[FlairChoice], FlairChoice | None]:
        """Return the flairs the user can assign themself, and their current one."""
        return self._choices(f"r/{subreddit}/api/flairselector", {"name": username})

    def choices_for_post(
        self, post_id: str
    ) -> tuple[list[FlairChoice], FlairChoice | None]:
        """Return the flairs assignable to an existing post, and its current one."""
        return self._choices("api/flairselector", {"link": post_id})

    def choices_for_new_post(self, subreddit: str) -> list[FlairChoice]:
        """Return the flairs assignable to a new post in the subreddit."""
        choices, _ = self._choices(
            f"r/{subreddit}/api/flairselector", {"is_newlink": True}
        )
        return choices

    def select(self, subreddit: str, request: FlairSelectRequest | None) -> Response:
        """Select a flair to display next to your username in the subreddit."""
        return self.assign(subreddit, self.client.username, request)

    def assign(
        self, subreddit: str, user: str, request: FlairSelectRequest | None
    ) -> Response:
        """Assign a flair to a user in the subreddit."""
        _require(request, "FlairSelectRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["name"] = user
        return self.client.request("POST", f"r/{subreddit}/api/selectflair", form=form)

    def select_for_post(self, post_id: str, request: FlairSelectRequest | None) -> Response:
        """Assign a flair to the post."""
        _require(request, "FlairSelectRequest")
        form = request.to_form()
        form["api_type"] = "json"
        form["link"] = post_id
        return self.client.request("POST", "api/selectflair", form=form)

    def remove_from_post(self, post_id: str) -> Response:
        """Remove the flair from the post."""
        return self.client.request(
            "POST", "api/selectflair", form={"api_type": "json", "link": post_id}
        )

    def change(
        self, subreddit: str, requests: Sequence[FlairChangeRequest] | None
    ) -> list[FlairChangeResponse]:
        """Change the flair of between 1 and 100 users at once."""
        if not requests or len(requests) > 100:
            raise ValueError("requests: must provide between 1 and 100")
        response = self.client.request(
            "POST",
            f"r/{subreddit}/api/flaircsv",
            form={"flair_csv": _flair_csv(requests)},
        )
        return [FlairChangeResponse.from_json(item) for item in response.data or []]