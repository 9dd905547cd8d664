import json
from urllib.parse import parse_qsl

import pytest
import responses

from snooclient.client import Client
from snooclient.flair import (
    Flair,
    FlairChangeRequest,
    FlairChangeResponse,
    FlairChoice,
    FlairConfigureRequest,
    FlairSelectRequest,
    FlairService,
    FlairSummary,
    FlairTemplate,
    FlairTemplateCreateOrUpdateRequest,
)

BASE = "https://reddit.example.com/"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mocked:
        yield mocked


@pytest.fixture
def service():
    return FlairService(Client(base_url=BASE, username="user1"))


def _form(call):
    body = call.request.body or ""
    if isinstance(body, bytes):
        body = body.decode()
    return dict(parse_qsl(body, keep_blank_values=True))


USER_FLAIRS_JSON = [
    {
        "id": "b8a1c822-3feb-11e8-88e1-0e5f55d58ce0",
        "type": "text",
        "text": "Beginner",
        "text_color": "dark",
        "background_color": "",
        "css_class": "Beginner1",
        "text_editable": False,
        "mod_only": False,
    },
    {
        "id": "b8ea0fce-3feb-11e8-af7a-0e263a127cf8",
        "type": "text",
        "text": "Moderator",
        "text_color": "dark",
        "background_color": "",
        "css_class": "Moderator1",
        "text_editable": False,
        "mod_only": True,
    },
]

EXPECTED_USER_FLAIRS = [
    Flair(
        id="b8a1c822-3feb-11e8-88e1-0e5f55d58ce0",
        type="text",
        text="Beginner",
        color="dark",
        background_color="",
        css_class="Beginner1",
        editable=False,
        mod_only=False,
    ),
    Flair(
        id="b8ea0fce-3feb-11e8-af7a-0e263a127cf8",
        type="text",
        text="Moderator",
        color="dark",
        background_color="",
        css_class="Moderator1",
        editable=False,
        mod_only=True,
    ),
]

POST_FLAIRS_JSON = [
    {
        "id": "305b503e-da60-11ea-9681-0e9f1d580d2d",
        "type": "richtext",
        "text": "test",
        "text_color": "light",
        "background_color": "#373c3f",
        "css_class": "test",
        "text_editable": False,
        "mod_only": True,
    }
]

EXPECTED_POST_FLAIRS = [
    Flair(
        id="305b503e-da60-11ea-9681-0e9f1d580d2d",
        type="richtext",
        text="test",
        color="light",
        background_color="#373c3f",
        css_class="test",
        editable=False,
        mod_only=True,
    )
]

FLAIR_TEMPLATE_JSON = {
    "id": "be0a6110-f23c-11ea-862f-0e08890d7323",
    "flairType": "LINK_FLAIR",
    "modOnly": False,
    "allowableContent": "all",
    "text": "lol",
    "type": "richtext",
    "textColor": "dark",
    "textEditable": False,
    "richtext": [{"e": "text", "t": "lol"}],
    "overrideCss": False,
    "maxEmojis": 1,
    "backgroundColor": "#fafafa",
    "cssClass": "",
}

EXPECTED_FLAIR_TEMPLATE = FlairTemplate(
    id="be0a6110-f23c-11ea-862f-0e08890d7323",
    type="LINK_FLAIR",
    mod_only=False,
    allowable_content="all",
    text="lol",
    text_type="richtext",
    text_color="dark",
    text_editable=False,
    rich_text=[{"e": "text", "t": "lol"}],
    override_css=False,
    max_emojis=1,
    background_color="#fafafa",
    css_class="",
)


def _choice_json(template_id, text):
    return {
        "flair_template_id": template_id,
        "flair_text": text,
        "flair_text_editable": False,
        "flair_position": "left",
        "flair_css_class": "",
    }


CHOICES_JSON = {
    "choices": [
        _choice_json("c4edd5ce-40e8-11e7-b814-0ef91bd65558", "Reddit API"),
        _choice_json("49bb3d06-0dad-11e7-b897-0e42c2400b7a", "PRAW"),
        _choice_json("f1905376-40e9-11e7-a0dc-0e2f53ef3712", "snoowrap"),
        _choice_json("03dc6ea8-40e9-11e7-8abb-0eb85aed0bce", "Other API Wrapper"),
    ],
    "current": _choice_json("03dc6ea8-40e9-11e7-8abb-0eb85aed0bce", "Other API Wrapper"),
}

EXPECTED_CHOICES = [
    FlairChoice("c4edd5ce-40e8-11e7-b814-0ef91bd65558", "Reddit API", False, "left", ""),
    FlairChoice("49bb3d06-0dad-11e7-b897-0e42c2400b7a", "PRAW", False, "left", ""),
    FlairChoice("f1905376-40e9-11e7-a0dc-0e2f53ef3712", "snoowrap", False, "left", ""),
    FlairChoice(
        "03dc6ea8-40e9-11e7-8abb-0eb85aed0bce", "Other API Wrapper", False, "left", ""
    ),
]

EXPECTED_CHOICE = FlairChoice(
    "03dc6ea8-40e9-11e7-8abb-0eb85aed0bce", "Other API Wrapper", False, "left", ""
)


def test_get_user_flairs(rsps, service):
    rsps.get(BASE + "r/testsubreddit/api/user_flair_v2", json=USER_FLAIRS_JSON)
    assert service.get_user_flairs("testsubreddit") == EXPECTED_USER_FLAIRS


def test_get_post_flairs(rsps, service):
    rsps.get(BASE + "r/testsubreddit/api/link_flair_v2", json=POST_FLAIRS_JSON)
    assert service.get_post_flairs("testsubreddit") == EXPECTED_POST_FLAIRS


def test_list_user_flairs(rsps, service):
    rsps.get(
        BASE + "r/testsubreddit/api/flairlist",
        json={
            "users": [
                {"user": "TestUser1", "flair_text": "TestFlair1"},
                {"user": "TestUser2", "flair_text": "TestFlair2"},
            ]
        },
    )
    assert service.list_user_flairs("testsubreddit") == [
        FlairSummary(user="TestUser1", text="TestFlair1"),
        FlairSummary(user="TestUser2", text="TestFlair2"),
    ]


def test_configure(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairconfig", body="")
    with pytest.raises(ValueError, match="FlairConfigureRequest: cannot be None"):
        service.configure("testsubreddit", None)
    response = service.configure(
        "testsubreddit",
        FlairConfigureRequest(
            user_flair_enabled=True,
            user_flair_position="right",
            user_flair_self_assign_enabled=False,
            post_flair_position="left",
            post_flair_self_assign_enabled=False,
        ),
    )
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "flair_enabled": "true",
        "flair_position": "right",
        "flair_self_assign_enabled": "false",
        "link_flair_position": "left",
        "link_flair_self_assign_enabled": "false",
    }


def test_enable(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/setflairenabled", body="")
    response = service.enable("testsubreddit")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "flair_enabled": "true"}


def test_disable(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/setflairenabled", body="")
    response = service.disable("testsubreddit")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "flair_enabled": "false"}


def test_upsert_user_template(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairtemplate_v2", json=FLAIR_TEMPLATE_JSON)
    with pytest.raises(
        ValueError, match="FlairTemplateCreateOrUpdateRequest: cannot be None"
    ):
        service.upsert_user_template("testsubreddit", None)
    template = service.upsert_user_template(
        "testsubreddit",
        FlairTemplateCreateOrUpdateRequest(
            allowable_content="all",
            mod_only=True,
            text="testtext",
            text_color="dark",
            text_editable=False,
            max_emojis=5,
            background_color="transparent",
            css_class="testclass",
        ),
    )
    assert template == EXPECTED_FLAIR_TEMPLATE
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "flair_type": "USER_FLAIR",
        "allowable_content": "all",
        "text": "testtext",
        "text_color": "dark",
        "text_editable": "false",
        "mod_only": "true",
        "max_emojis": "5",
        "background_color": "transparent",
        "css_class": "testclass",
    }


def test_upsert_post_template(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairtemplate_v2", json=FLAIR_TEMPLATE_JSON)
    with pytest.raises(
        ValueError, match="FlairTemplateCreateOrUpdateRequest: cannot be None"
    ):
        service.upsert_post_template("testsubreddit", None)
    template = service.upsert_post_template(
        "testsubreddit",
        FlairTemplateCreateOrUpdateRequest(
            id="testid",
            allowable_content="text",
            mod_only=False,
            text="testtext",
            text_color="light",
            text_editable=True,
            background_color="#fafafa",
            css_class="testclass",
        ),
    )
    assert template == EXPECTED_FLAIR_TEMPLATE
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "flair_type": "LINK_FLAIR",
        "flair_template_id": "testid",
        "allowable_content": "text",
        "text": "testtext",
        "text_color": "light",
        "text_editable": "true",
        "mod_only": "false",
        "background_color": "#fafafa",
        "css_class": "testclass",
    }


def test_delete(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/deleteflair", body="")
    response = service.delete("testsubreddit", "testuser")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "name": "testuser"}


def test_delete_template(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/deleteflairtemplate", body="")
    response = service.delete_template("testsubreddit", "testtemplate")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "flair_template_id": "testtemplate",
    }


def test_delete_all_user_templates(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/clearflairtemplates", body="")
    response = service.delete_all_user_templates("testsubreddit")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "flair_type": "USER_FLAIR"}


def test_delete_all_post_templates(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/clearflairtemplates", body="")
    response = service.delete_all_post_templates("testsubreddit")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "flair_type": "LINK_FLAIR"}


def test_reorder_user_templates(rsps, service):
    rsps.add(
        responses.PATCH,
        BASE + "api/v1/testsubreddit/flair_template_order/USER_FLAIR",
        body="",
    )
    ids = ["test1", "test2", "test3", "test4"]
    response = service.reorder_user_templates("testsubreddit", ids)
    assert response.status_code == 200
    call = rsps.calls[-1]
    assert call.request.method == "PATCH"
    assert json.loads(call.request.body) == ids


def test_reorder_post_templates(rsps, service):
    rsps.add(
        responses.PATCH,
        BASE + "api/v1/testsubreddit/flair_template_order/LINK_FLAIR",
        body="",
    )
    ids = ["test1", "test2", "test3", "test4"]
    response = service.reorder_post_templates("testsubreddit", ids)
    assert response.status_code == 200
    call = rsps.calls[-1]
    assert call.request.method == "PATCH"
    assert json.loads(call.request.body) == ids


def test_choices(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairselector", json=CHOICES_JSON)
    choices, current = service.choices("testsubreddit")
    assert choices == EXPECTED_CHOICES
    assert current == EXPECTED_CHOICE
    assert _form(rsps.calls[-1]) == {"name": "user1"}


def test_choices_of(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairselector", json=CHOICES_JSON)
    choices, current = service.choices_of("testsubreddit", "testuser")
    assert choices == EXPECTED_CHOICES
    assert current == EXPECTED_CHOICE
    assert _form(rsps.calls[-1]) == {"name": "testuser"}


def test_choices_for_post(rsps, service):
    rsps.post(BASE + "api/flairselector", json=CHOICES_JSON)
    choices, current = service.choices_for_post("t3_123")
    assert choices == EXPECTED_CHOICES
    assert current == EXPECTED_CHOICE
    assert _form(rsps.calls[-1]) == {"link": "t3_123"}


def test_choices_for_new_post(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flairselector", json=CHOICES_JSON)
    assert service.choices_for_new_post("testsubreddit") == EXPECTED_CHOICES
    assert _form(rsps.calls[-1]) == {"is_newlink": "true"}


def test_choices_without_current(rsps, service):
    rsps.post(BASE + "api/flairselector", json={"choices": [], "current": None})
    assert service.choices_for_post("t3_123") == ([], None)


def test_select(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/selectflair", body="")
    with pytest.raises(ValueError, match="FlairSelectRequest: cannot be None"):
        service.select("testsubreddit", None)
    response = service.select(
        "testsubreddit", FlairSelectRequest(id="id123", text="text123")
    )
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "name": "user1",
        "flair_template_id": "id123",
        "text": "text123",
    }


def test_assign(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/selectflair", body="")
    with pytest.raises(ValueError, match="FlairSelectRequest: cannot be None"):
        service.assign("testsubreddit", "testuser", None)
    response = service.assign(
        "testsubreddit", "testuser", FlairSelectRequest(id="id123")
    )
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "name": "testuser",
        "flair_template_id": "id123",
    }


def test_select_for_post(rsps, service):
    rsps.post(BASE + "api/selectflair", body="")
    with pytest.raises(ValueError, match="FlairSelectRequest: cannot be None"):
        service.select_for_post("t3_123", None)
    response = service.select_for_post(
        "t3_123", FlairSelectRequest(id="id123", text="text123")
    )
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {
        "api_type": "json",
        "link": "t3_123",
        "flair_template_id": "id123",
        "text": "text123",
    }


def test_remove_from_post(rsps, service):
    rsps.post(BASE + "api/selectflair", body="")
    response = service.remove_from_post("t3_123")
    assert response.status_code == 200
    assert _form(rsps.calls[-1]) == {"api_type": "json", "link": "t3_123"}


CSV_CHANGE_JSON = [
    {
        "ok": False,
        "status": "skipped",
        "warnings": {},
        "errors": {"user": "unable to resolve user `testuser1', ignoring"},
    },
    {"ok": True, "status": "added flair for user testuser2", "warnings": {}, "errors": {}},
    {"ok": True, "status": "added flair for user testuser3", "warnings": {}, "errors": {}},
    {"ok": True, "status": "removed flair for user testuser4", "warnings": {}, "errors": {}},
]


def test_change(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flaircsv", json=CSV_CHANGE_JSON)
    with pytest.raises(ValueError, match="requests: must provide between 1 and 100"):
        service.change("testsubreddit", None)
    changes = service.change(
        "testsubreddit",
        [
            FlairChangeRequest("testuser1", "testtext1", "testclass1"),
            FlairChangeRequest("testuser2", "testtext2", "testclass2"),
            FlairChangeRequest("testuser3", "testtext3", "testclass3"),
            FlairChangeRequest("testuser4", "testtext4", "testclass4"),
        ],
    )
    assert _form(rsps.calls[-1]) == {
        "flair_csv": "testuser1,testtext1,testclass1\n"
        "testuser2,testtext2,testclass2\n"
        "testuser3,testtext3,testclass3\n"
        "testuser4,testtext4,testclass4\n"
    }
    assert changes == [
        FlairChangeResponse(
            ok=False,
            status="skipped",
            warnings={},
            errors={"user": "unable to resolve user `testuser1', ignoring"},
        ),
        FlairChangeResponse(ok=True, status="added flair for user testuser2"),
        FlairChangeResponse(ok=True, status="added flair for user testuser3"),
        FlairChangeResponse(ok=True, status="removed flair for user testuser4"),
    ]


def test_change_rejects_more_than_100(service):
    requests = [FlairChangeRequest(f"user{i}") for i in range(101)]
    with pytest.raises(ValueError, match="requests: must provide between 1 and 100"):
        service.change("testsubreddit", requests)


def test_change_quotes_csv_fields(rsps, service):
    rsps.post(BASE + "r/testsubreddit/api/flaircsv", json=[])
    changes = service.change("testsubreddit", [FlairChangeRequest("u", 'a,"b"', "")])
    assert changes == []
    assert _form(rsps.calls[-1]) == {"flair_csv": 'u,"a,""b""",\n'}


def test_template_request_form_omits_unset():
    assert FlairTemplateCreateOrUpdateRequest(text="t").to_form() == {"text": "t"}


def test_select_request_form_omits_empty():
    assert FlairSelectRequest(id="abc").to_form() == {"flair_template_id": "abc"}
    assert FlairSelectRequest().to_form() == {}