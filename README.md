# plugbot

Building blocks for a group chat bot. Each feature is a plain Python function
or class that takes the message text, group id, user id and so on, and returns
the reply. You connect them to your own chat transport.

## Service switches: `plugbot.control`

`ControlRegistry` keeps one on/off switch per service and per group, stored in
SQLite (default path `data/control/plugins.db`; `":memory:"` also works). Each
service is registered with `Options(disable_on_default=False, help="")`.

```python
from plugbot.control import ControlRegistry, Options

with ControlRegistry(":memory:") as registry:
    registry.register("choose", Options(help="choose\n- 选择A还是B"))

    ctrl = registry.lookup("choose")     # None if the service is unknown
    ctrl.disable(123456)                 # off in group 123456
    ctrl.is_enabled_in(123456)           # False
    ctrl.reset(123456)                   # back to the default for that group
    ctrl.allows(0, 42)                   # group 0 means a private chat: checks -42

    print(registry.handle_command("禁用", "choose", 123456, 42))
    print(registry.service_list(123456))
    print(registry.usage("choose"))
```

Group id `0` stands for all groups: `enable(0)` and `disable(0)` set the state
for every group without a setting of its own; `reset(0)` does nothing. If
neither the group nor group `0` has a setting, `disable_on_default` decides.

`handle_command(command, args, group_id, user_id)` understands
`启用`/`enable`, `禁用`/`disable`, `全局启用`/`enableall`,
`全局禁用`/`disableall`, `还原`/`reset`, `用法`/`usage` and
`服务列表`/`service_list`, and returns the reply text. Other commands raise
`ValueError`. `delete(service)` forgets a service but keeps its stored
settings; `items()` lists `(name, Control)` pairs.

## base16384: `plugbot.base16384`

Seven bytes become four characters in U+4E00..U+8DFF. A shorter last block is
marked with a character in U+3D01..U+3D06.

```python
from plugbot import base16384

text = base16384.encode_string("hello")
assert base16384.decode_string(text) == "hello"
assert base16384.decode(base16384.encode(b"\x00\x01\x02")) == b"\x00\x01\x02"
```

`decode` raises `ValueError` on foreign characters or truncated input.

## Conflict check between bots: `plugbot.conflict`

This module finds services that two bots in the same group both answer.

- `gen_token(now=None)` encodes the unix time as a four-character token.
  The probe message is `PROBE_PREFIX + token`.
- `is_valid_token(token, now=None)` checks that the token is less than
  `TOKEN_LIFETIME` (10) seconds old.
- `enabled_report(registry, group_id)` returns `"●cd●"` followed by the
  encoded names of the services enabled in the group. It returns `None` when
  no service is enabled.
- `apply_report(registry, report, group_id)` switches off, in that group,
  every service named in the report that is enabled there. It returns the
  names it switched off and raises `ValueError` if the text is not a report.

## Small plugins

- `plugbot.atri`: replies in a persona. `respond(text, hour, to_me, rng)`
  returns a `Reply` (text, image file name or voice record file name,
  optionally quoting the message) or `None`. The persona is asleep from 1 to
  6 o'clock (`is_awake`). At that time it still answers greetings but
  nothing else. `morning_reply`, `noon_reply` and `night_reply` pick a reply
  by hour.
- `plugbot.chat`:
  - `call_reply(nickname, rng)` answers when the bot is called by name.
  - `poke_reply(limiter, user_id, nickname)` answers pokes. It is limited by a
    per-user token bucket, `RateLimiter(interval, burst)`.
  - `AirConditioner` is a joke switch and temperature for each group:
    `turn_on`, `turn_off`, `set_temperature`, `status`.
- `plugbot.choose`: `choose("A还是B还是C", nickname, rng)` lists the options
  and picks one.
- `plugbot.aiwife`: `waifu_url(rng)` gives the URL of one of 100000
  generated portraits.

## Daily fortune: `plugbot.fortune`

- `FortuneConfig(path)` stores, as JSON, the background set chosen by each
  group. The sets are listed in `TABLE` and the default is `车万`. Its
  methods are `load`, `save`, `set_kind` (raises `ValueError` for an unknown
  set) and `kind_for`.
- `daily_seed(user_id, date)` gives a seed that stays the same for one user
  for one day.
- `rand_image(dir, seed)` and `rand_text(slips_json, seed)` pick the
  background picture and the `(title, content)` of the slip.
- `unpack(zip, dest)` extracts a background archive and refuses unsafe paths.
- `layout_text`, `offset` and `rows_num` place the slip text in vertical
  columns of up to nine characters.
- `draw(background, title, text, font_path=None)` renders the card with
  Pillow and returns base64-encoded JPEG bytes.

## Stored essays: `plugbot.diana`

- `Composition(path, url=None)` holds a list of texts stored in a
  protobuf-encoded file (default `data/Diana/text.pb`).
  - `load()` reads the file. If the file is missing and `url` is set, it
    downloads it first.
  - `add(text)` stores a new text. It returns `False` for an empty text or a
    duplicate.
  - `outburst()` returns the first text.
  - `random(rng)` returns any text except the first.
- `convert(txt_path, out_path)` turns a text file, one entry per line, into
  such a file.
- `full_match(texts, *words)` tells whether a message segment equals one of
  the words once spaces and line breaks are removed.
- `query_duplicates(text)` asks an online index for similar essays.
  `format_report(result, now)` turns the answer into the reply text.

## Lookups and status

- `plugbot.github`:
  - `search_repository(query)` returns the first search hit. It raises
    `RuntimeError` on a non-200 answer and `LookupError` when nothing is
    found.
  - `format_repository(repo)` turns the hit into the reply text.
  - `card_image_url(full_name)` gives the URL of the repository's preview
    picture.
- `plugbot.acgimage`:
  - `AcgImage` holds the random picture source (`set_api`, `direct_url`) and
    the last direct picture of each group (`remember`, `recall`).
  - `hint_url(dhash)` gives the picture URL for a hint hash.
  - `classify_reply(...)` builds the messages that answer a picture rating.
- `plugbot.sysinfo`: `status_report()` returns CPU (measured over one
  second), RAM and first-partition disk usage in whole percent.

## Web control panel: `plugbot.webctrl`

`create_app(registry, requests)` builds a Flask application. It works on a
`ControlRegistry` and a `RequestStore` of pending friend and group requests
(`RequestEvent`). The store has `store`, `pop` and `all`. Its optional
`handler(event, approve, reason)` is called when a request is decided.

```python
from plugbot.control import ControlRegistry
from plugbot.webctrl import RequestStore, create_app

app = create_app(ControlRegistry(), RequestStore())
app.run(host="127.0.0.1", port=3000)
```

The app has these routes:

- GET: `/` (redirect), `/get_label`.
- POST: `/get_plugins`, `/get_plugins_status`, `/get_plugin_status`,
  `/update_plugin_status`, `/update_plugin_all_group_status`,
  `/update_all_plugin_status`, `/get_requests`, `/handle_request`.

Parameters come from form fields or a JSON body. Bad input gets a 400 answer,
and an unknown service or flag gets a 404. Browsers get CORS headers.

## What the package does not do

- It does not connect to any chat network. There is no event loop and no
  message sending; you call the functions and send the replies yourself.
- It does not schedule anything and does not download fortune backgrounds or
  fonts. `fortune` works on files you provide.
- The control panel serves no front-end pages: `/` redirects to
  `/dist/dist/default.html`, which the app does not provide. It has no live
  log or message stream. It cannot list bots, groups or friends, or send
  messages.