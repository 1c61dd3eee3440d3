# venom

A library of building blocks for test suites written in YAML: finding
suite files, reading their `vars` section, interpolating `{{.name}}`
placeholders, applying the variable assignments and `range` of a step,
and a set of step executors.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Finding and reading suite files

```python
from venom.files import get_files_path
from venom.partial import read_partial_yml, get_var_from_partial_yml

paths = get_files_path(["suites/", "more/**/*.yml"])
with open(paths[0]) as fh:
    content = fh.read()

print(read_partial_yml(content, "vars"))   # the raw "vars:" block
print(get_var_from_partial_yml(content))   # that block as a dict
```

- `get_files_path(paths)` turns each directory into a `*.y*ml` pattern,
  expands glob patterns (`**` included), keeps only `.yml` and `.yaml`
  files, drops duplicates while keeping the first occurrence, and raises
  `FileNotFoundError` when nothing is found.
- `uniq(items)` removes duplicates, keeping order.
- `read_partial_yml(content, attribute)` returns the lines of one
  top-level block; `get_var_from_partial_yml(content)` and
  `get_user_executor_input_yml(content)` parse the `vars` and `input`
  blocks into mappings, raising `ValueError` on invalid YAML.

## Templates

```python
from venom.template import interpolate, escape_quotes

interpolate("hello {{.name}}", {"name": "world"})  # "hello world"
interpolate("{{.unknown}}", {})                    # left as written
escape_quotes({"quote": 'say "hi"'})               # {"quote": 'say \\"hi\\"'}
```

`interpolate` raises `ValueError` when a `{{` is never closed.

## Steps

`venom.steps` works on the raw text of a step:

- `process_variable_assignments(tc_name, tc_vars, raw_step)` reads the
  step's `vars:` block, where each entry has `from` and an optional
  `regex`. A value is looked up as `from`, then as `<tc_name>.<from>`;
  with a regex, the last capture group of the first match is kept, or an
  empty string when nothing matches or the value is not a string. It
  returns `None` when the step assigns nothing and raises
  `AssignmentError` on a missing reference or a bad regex.
- `parse_ranged(raw_step, step_vars)` reads the `range` attribute of a
  JSON step. A list gives one `RangeData` per element keyed by index, a
  number `n` gives `0 .. n-1`, a mapping gives one item per key; a string
  is parsed as JSON, templated with `step_vars` first when needed. The
  result is a `Range`; without a `range` attribute it holds one empty
  item and `enabled` is false. Unusable data raises `RangeError`.

## Executors

| Module | What it offers |
| --- | --- |
| `venom.executors.readfile` | `read_files(path, workdir)` and `run(path, workdir)`: content of matched files, JSON view of it, and per-file MD5, size, mode and modification time in a `ReadFileResult` |
| `venom.executors.redis_exec` | `run(dial_url, commands, file_path, workdir)` runs command lines against a Redis server and returns `RedisCommand` records; `get_command_details`, `handle_redis_response`, `file_to_lines` |
| `venom.executors.kafka_message` | `Message`, `MessageJSON`, `create_message` / `get_message_avro_id` for the magic-byte and schema-id framing, `convert_message_to_json` |
| `venom.executors.kafka_config` | `parse_kafka_step`, `KafkaExecutorConfig.validate`, `load_messages_file`, `get_raw_message_value` |
| `venom.executors.imap_mail` | `extract_mail(header, body, uid)` decodes a fetched mail into a `Mail`; `MailSearch.matches` applies the search patterns; `imap_address` |
| `venom.executors.smtp_exec` | `build_message` and `send_email`, which delivers one mail over SMTP (optionally over TLS, with login) |
| `venom.executors.hello` | `run(step)` returns `HelloResult(body="Hello <arg>")` |
| `venom.executors.web_keys` | `key_code(name)` and the `KEYS` mapping of browser key codes |
| `venom.executors.syncbuffer` | `SyncBuffer`, a lock-protected FIFO byte buffer |

```python
from venom.executors import readfile

result = readfile.run("data/*.json", workdir="/path/to/suite")
print(result.err or result.content, result.md5sum)
```

## What this package does not do

There is no test runner and no command line: nothing here runs a whole
suite, reports results or writes report files. The Kafka modules prepare
and decode messages but do not connect to a broker or a schema registry,
and the IMAP module decodes and matches mails but does not connect to a
mail server. There are no executors for SSH, MQTT, RabbitMQ, SQL or
browser automation.