"""Account endpoints: profile, karma, preferences, trophies and relationships."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from .client import Client, Response


@dataclass
class SubredditKarma:
    """Karma earned by the account in one subreddit."""

    subreddit: str = ""
    post_karma: int = 0
    comment_karma: int = 0


def _karma_from_json(data: dict[str, Any]) -> SubredditKarma:
    return SubredditKarma(
        subreddit=data.get("sr") or "",
        post_karma=int(data.get("link_karma") or 0),
        comment_karma=int(data.get("comment_karma") or 0),
    )


def _key(name: str) -> Any:
    return field(default=None, metadata={"json": name})


@dataclass
class Settings:
    """Account preferences. Fields left as ``None`` are not sent on update."""

    accept_private_messages: str | None = _key("accept_pms")
    activity_relevant_ads: bool | None = _key("activity_relevant_ads")
    allow_click_tracking: bool | None = _key("allow_clicktracking")
    beta: bool | None = _key("beta")
    show_recently_viewed_posts: bool | None = _key("clickgadget")
    collapse_read_messages: bool | None = _key("collapse_read_messages")
    compress: bool | None = _key("compress")
    creddit_autorenew: bool | None = _key("creddit_autorenew")
    default_comment_sort: str | None = _key("default_comment_sort")
    show_domain_details: bool | None = _key("domain_details")
    send_email_digests: bool | None = _key("email_digests")
    send_messages_as_emails: bool | None = _key("email_messages")
    unsubscribe_from_all_emails: bool | None = _key("email_unsubscribe_all")
    disable_custom_themes: bool | None = _key("enable_default_themes")
    location: str | None = _key("geopopular")
    hide_ads: bool | None = _key("hide_ads")
    hide_from_search_engines: bool | None = _key("hide_from_robots")
    hide_upvoted_posts: bool | None = _key("hide_ups")
    hide_downvoted_posts: bool | None = _key("hide_downs")
    highlight_controversial_comments: bool | None = _key("highlight_controversial")
    highlight_new_comments: bool | None = _key("highlight_new_comments")
    ignore_suggested_sorts: bool | None = _key("ignore_suggested_sort")
    # Use this one to set the new-design preference...
    use_new_reddit: bool | None = _key("in_redesign_beta")
    # ...and this one to read it.
    uses_new_reddit: bool | None = _key("design_beta")
    label_nsfw: bool | None = _key("label_nsfw")
    language: str | None = _key("lang")
    show_old_search_page: bool | None = _key("legacy_search")
    enable_notifications: bool | None = _key("live_orangereds")
    mark_messages_as_read: bool | None = _key("mark_messages_read")
    show_thumbnails: str | None = _key("media")
    auto_expand_media: str | None = _key("media_preview")
    minimum_comment_score: int | None = _key("min_comment_score")
    minimum_post_score: int | None = _key("min_link_score")
    enable_mention_notifications: bool | None = _key("monitor_mentions")
    open_links_in_new_window: bool | None = _key("newwindow")
    dark_mode: bool | None = _key("nightmode")
    disable_profanity: bool | None = _key("no_profanity")
    number_of_comments: int | None = _key("num_comments")
    number_of_posts: int | None = _key("numsites")
    show_spotlight_box: bool | None = _key("organic")
    subreddit_theme: str | None = _key("other_theme")
    show_nsfw: bool | None = _key("over_18")
    enable_private_rss_feeds: bool | None = _key("private_feeds")
    profile_opt_out: bool | None = _key("profile_opt_out")
    publicize_votes: bool | None = _key("public_votes")
    allow_research: bool | None = _key("research")
    include_nsfw_search_results: bool | None = _key("search_include_over_18")
    receive_crosspost_messages: bool | None = _key("send_crosspost_messages")
    receive_welcome_messages: bool | None = _key("send_welcome_messages")
    show_user_flair: bool | None = _key("show_flair")
    show_post_flair: bool | None = _key("show_link_flair")
    show_gold_expiration: bool | None = _key("show_gold_expiration")
    show_location_based_recommendations: bool | None = _key(
        "show_location_based_recommendations"
    )
    show_promote: bool | None = _key("show_promote")
    show_custom_subreddit_themes: bool | None = _key("show_stylesheets")
    show_trending_subreddits: bool | None = _key("show_trending")
    show_twitter: bool | None = _key("show_twitter")
    store_visits: bool | None = _key("store_visits")
    theme_selector: str | None = _key("theme_selector")
    allow_third_party_data_ad_personalization: bool | None = _key(
        "third_party_data_personalized_ads"
    )
    allow_third_party_site_data_ad_personalization: bool | None = _key(
        "third_party_site_data_personalized_ads"
    )
    allow_third_party_site_data_content_personalization: bool | None = _key(
        "third_party_site_data_personalized_content"
    )
    enable_threaded_messages: bool | None = _key("threaded_messages")
    enable_threaded_modmail: bool | None = _key("threaded_modmail")
    top_karma_subreddits: bool | None = _key("top_karma_subreddits")
    use_global_defaults: bool | None = _key("use_global_defaults")
    enable_video_autoplay: bool | None = _key("video_autoplay")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from the API's preference keys, ignoring unknown ones."""
        values = {
            f.name: data[f.metadata["json"]]
            for f in fields(cls)
            if f.metadata["json"] in data
        }
        return cls(**values)

    def to_json(self) -> dict[str, Any]:
        """Return the set preferences keyed by their API names."""
        return {
            f.metadata["json"]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _relationships(root: Any) -> list[dict[str, Any]]:
    if not isinstance(root, dict):
        return []
    data = root.get("data") or {}
    return list(data.get("children") or [])


class AccountService:
    """Endpoints for the authenticated account."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def info(self) -> dict[str, Any]:
        """Return general information about the account."""
        response = self.client.request("GET", "api/v1/me")
        return response.data or {}

    def karma(self) -> list[SubredditKarma]:
        """Return a breakdown of the account's karma per subreddit."""
        thing, _ = self.client.get_thing("api/v1/me/karma")
        return [_karma_from_json(item) for item in (thing or {}).get("data") or []]

    def settings(self) -> Settings:
        """Return the account settings."""
        response = self.client.request("GET", "api/v1/me/prefs")
        return Settings.from_json(response.data or {})

    def update_settings(self, settings: Settings) -> Settings:
        """Update the account settings and return the resulting version."""
        response = self.client.request(
            "PATCH", "api/v1/me/prefs", json_body=settings.to_json()
        )
        return Settings.from_json(response.data or {})

    def trophies(self) -> list[dict[str, Any]]:
        """Return the data of each of the account's trophies."""
        thing, _ = self.client.get_thing("api/v1/me/trophies")
        data = (thing or {}).get("data") or {}
        return [item.get("data") or {} for item in data.get("trophies") or []]

    def friends(self) -> list[dict[str, Any]]:
        """Return the account's friends."""
        response = self.client.request("GET", "prefs/friends")
        roots = response.data or []
        return _relationships(roots[0]) if roots else []

    def blocked(self) -> list[dict[str, Any]]:
        """Return the users the account has blocked."""
        response = self.client.request("GET", "prefs/blocked")
        return _relationships(response.data)

    def messaging(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Return blocked users and trusted users, respectively."""
        response = self.client.request("GET", "prefs/messaging")
        roots = list(response.data or [])
        roots += [None] * (2 - len(roots))
        return _relationships(roots[0]), _relationships(roots[1])

    def trusted(self) -> list[dict[str, Any]]:
        """Return the account's trusted users."""
        response = self.client.request("GET", "prefs/trusted")
        return _relationships(response.data)

    def add_trusted(self, username: str) -> Response:
        """Add a user to the account's trusted users."""
        return self.client.request(
            "POST", "api/add_whitelisted", form={"api_type": "json", "name": username}
        )

    def remove_trusted(self, username: str) -> Response:
        """Remove a user from the account's trusted users."""
        return self.client.request(
            "POST", "api/remove_whitelisted", form={"name": username}
        )