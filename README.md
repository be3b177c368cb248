# hermes

Building blocks for a chat gateway that puts an agent on messaging platforms:

- `hermes.session_db.SessionDb` stores sessions and messages in SQLite and
  runs FTS5 full-text search over message content.
  `hermes.session_search.SessionSearch` is a thin search front end over it.
- `hermes.session_router.SessionRouter` maps a platform chat
  (`SessionSource`) to a session id and keeps the table in
  `~/.hermes/session_routes.json` (or a path you pass in).
- `hermes.registry.ToolRegistry` registers tools (`ToolDef`), lists their
  schemas and dispatches calls to them.
- `hermes.logbuffer.LogBuffer` is a bounded in-memory log that can be
  queried, appended to a JSON-lines file and rotated at 10 MiB.
  `hermes.logbuffer.log_agent` records an entry and echoes it to stderr.
- `hermes.agent_log` is a process-wide bridge: install a callable with
  `init_log_sender`, forward entries with `send_log`, remove it with
  `drop_log_sender`.
- `hermes.status` builds status, usage-analytics and search reports from a
  session database.
- `hermes.toolsets` groups known tool names into named toolsets.
- `hermes.platforms` holds async adapters for Discord, Slack, Telegram and
  Signal. They share one interface, `hermes.platforms.base.PlatformAdapter`.
- `hermes.errors` defines `HermesError` and its subclasses.

## Installation

```
pip install .
```

With the test tools:

```
pip install ".[test]"
```

## Usage

### Sessions

`SessionDb` is synchronous and thread-safe; it can be used as a context
manager.

```python
from hermes.session_db import SessionDb

with SessionDb("sessions.db") as db:
    info = db.create_session("gpt-4")
    db.save_message(info.id, "user", "hello")
    messages = db.get_messages(info.id)
    hits = db.search_sessions("hello", 10)
```

A malformed search query raises `sqlite3.Error`.

### Routing chats to sessions

```python
from hermes.session_router import SessionRouter, SessionSource

router = SessionRouter("routes.json")
source = SessionSource(platform="telegram", chat_id="42", chat_type="private", user_id="7")
router.add_mapping(source, info.id)
router.get_session(source)          # the session id
router.list_sessions("telegram")    # JSON text
```

### Tools

```python
from hermes.registry import ToolDef, ToolParameter, ToolRegistry

registry = ToolRegistry()
registry.register(ToolDef(
    name="echo",
    description="Return the arguments unchanged",
    parameters=[ToolParameter(name="text", description="Text", param_type="string", required=True)],
    handler=lambda args: args,
))
registry.dispatch("echo", {"text": "hi"})
```

Dispatching to a tool that is not registered raises
`hermes.errors.ToolNotFoundError`.

### Logs

```python
from hermes.logbuffer import LogBuffer, log_agent

buffer = LogBuffer(1000, file_path="agent.jsonl")
log_agent(buffer, "info", "gateway", "started")
buffer.query(level="info", limit=10)
buffer.write_to_file()
buffer.rotate_if_needed()
```

Without `file_path` the buffer writes to `~/.hermes/logs/agent.jsonl`.

### Reports

```python
from hermes import status
from hermes.toolsets import list_toolsets

status.get_status(db, uptime_secs=120)
status.get_analytics(db)
status.search_sessions(db, "hello")
list_toolsets(["terminal", "web_search", "my_tool"])
```

### Platforms

```python
from hermes.platforms.base import SendMessage
from hermes.platforms.telegram import TelegramAdapter

async with TelegramAdapter("token") as bot:
    await bot.connect()
    for event in await bot.poll_updates():
        await bot.send(SendMessage(text="got it", chat_id=event.chat_id))
```

Each adapter accepts an optional `httpx.AsyncClient`; without one it creates
its own and closes it on exit from the `async with` block. A rejected request
raises `hermes.platforms.base.PlatformError`.

## What this package does not do

It is a library only. It has no HTTP server exposing the gateway API, no
client for such an API, no command-line program and no agent loop that runs
conversations. Platform support covers Discord, Slack, Telegram and Signal;
there is no WhatsApp or Feishu adapter.

## Files

State lives under `~/.hermes` by default. `hermes.status` honours the
`HERMES_HOME` and `HERMES_CONFIG` environment variables in place of the
defaults.

## Tests

Run the test suite with pytest:

```
pytest
```