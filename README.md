# snooclient

A small, synchronous client for the Reddit API built on `requests`.

It covers these areas of the API, one service class each:

- **Account** (`snooclient.account.AccountService`): your info, karma per subreddit, trophies,
  settings (`Settings`), and your friends, blocked and trusted users.
- **Collections** (`snooclient.collection.CollectionService`): curated groups of posts within a
  subreddit (`Collection`, `CollectionCreateRequest`).
- **Emoji** (`snooclient.emoji.EmojiService`): listing, uploading, updating and deleting subreddit
  emojis, and setting their custom size.
- **Flair** (`snooclient.flair.FlairService`): user and post flair, flair templates, flair
  selection and bulk changes of up to 100 users at once.
- **Gold** (`snooclient.gold.GoldService`): gilding posts or comments and giving gold.
- **Messages** (`snooclient.message.MessageService`): your inbox, unread and sent messages,
  sending, marking read/unread, collapsing, blocking and deleting.

## Installation

```
pip install snooclient
```

## Usage

Create a `snooclient.client.Client` and hand it to the service you need. The client sends every
request through a `requests.Session`; give it one that already carries your authentication.
`base_url` defaults to `https://oauth.reddit.com/`.

```python
import requests

from snooclient.client import Client, ListOptions
from snooclient.collection import CollectionService
from snooclient.gold import GoldService
from snooclient.message import MessageService, SendMessageRequest

session = requests.Session()
session.headers["Authorization"] = "Bearer token"

client = Client(
    base_url="https://oauth.reddit.com",
    username="some_user",
    session=session,
    user_agent="my-app/0.1",
)

for collection in CollectionService(client).from_subreddit("t5_2uquw1"):
    print(collection.title, collection.post_ids)

messages = MessageService(client)
comments, private_messages = messages.inbox(ListOptions(limit=25))
messages.send(SendMessageRequest(to="another_user", subject="hello", text="hi there"))

GoldService(client).give("another_user", 1)
```

Methods that fetch data return the parsed result: dataclasses such as `Collection`, `Message`,
`Emoji`, `Flair` or `FlairTemplate`, or lists and tuples of them. Some account data (`info`,
`trophies`, and the friend, blocked and trusted lists) comes back as plain dictionaries. Methods
that only perform an action return a `snooclient.client.Response`, which holds the HTTP response,
its decoded JSON in `data`, the rate-limit state in `rate`, and `status_code`.

`Client.request`, `Client.get_thing` and `Client.get_listing` can also be called directly for
endpoints that no service wraps.

## Errors

Failures reported by the API are raised as exceptions from `snooclient.errors`, all derived from
`RedditError`:

- `ErrorResponse`: the API answered with a non-success status code.
- `JSONErrorResponse`: the API answered with a success status but listed errors in its JSON body.
  Each one is an `APIError` with a `label`, `reason` and `field`.
- `RateLimitError`: the API answered `429`. It carries the last known `Rate`, and
  `format_rate_reset()` says when the limit resets.

Arguments that are not valid, such as a missing request object, an empty list of ids, an emoji
without a name, or a gold duration outside 1 to 36 months, raise `ValueError` before any request
is sent.

## What it does not do

- It does not obtain OAuth tokens or log in; the session you pass must already be authenticated.
- It has no services for submitting or reading posts, comments or subreddits, or for live
  threads, and no streaming of new content.
- It keeps no state between calls and has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```