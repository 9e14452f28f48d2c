# kate

A library of building blocks for long-running services: forgiving value
conversion, filling dataclasses from mappings, string helpers, background
task and timer engines, trace ids and CSV files.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `kate.conv`: forgiving conversion of arbitrary values. `get_bool`, `get_string`,
  `get_int`, `get_int8`, `get_int16`, `get_int32`, `get_int64`, `get_uint`,
  `get_uint8`, `get_uint16`, `get_uint32`, `get_uint64`, `get_float32`,
  `get_float64`, `string_join`, `get_byte_array`, `get_by_kind` (with the `Kind`
  enum), `str2bytes`, `bytes2str`. Input that cannot be parsed gives the zero
  value of the target type instead of raising; out-of-range text is clamped.
- `kate.binding`: fill dataclass instances from dictionaries. Field metadata acts
  as tags: `bind(obj, "query", data)` sets each field from the key named in its
  `"query"` metadata, `fill_struct(obj, data)` uses field names as keys, and
  `fill_struct_by_tag(obj, tag, data)` sets only fields whose `"field"` metadata
  lists `tag` and returns their names. `set_defaults(obj)` fills zero-valued
  fields from their `"default"` metadata string. Sized numbers are declared with
  `Annotated[int, Kind.INT8]` and the like, `Optional[X]` is bound as `X`, and
  `list[X]` accepts comma-separated strings (`BIND_SLICE_SEP`). Types deriving
  from `BindUnmarshaler` build themselves from strings via `unmarshal_bind`.
  `is_type(value, expected)` checks an exact type.
- `kate.text`: `to_snake`, `to_camel`, `to_camel_lower`, `is_all_numbers`,
  `is_all_letters`, `is_all_number_letters`, `find_all_prefix_match` (on a sorted
  sequence), `split` (strips parts and drops empty ones), `trim_until`,
  `repeat_with_sep`, `join_slice`, `filter_keys`.
- `kate.search`: `find_first` and `find_last`, binary searches over a monotone
  predicate on `[0, n)`.
- `kate.hashing`: `crc32` (IEEE) and `fnv32a` for `str` or `bytes`.
- `kate.randutil`: `rand_between`, `rand_string` (with `LETTERS_ALPHA_NUMBER`,
  `LETTERS_NUMBER`, `LETTERS_ALPHA`), `fast_uuid` (24 bytes, unique within the
  process) and `fast_uuid_str` (48 hex digits).
- `kate.files`: `count_line`, `touch_file`, `is_file_exists`.
- `kate.timeutil`: `milliseconds`, `time_location_of_utc_offset`,
  `time_in_utc_offset`, `get_day_range_of_month`, `get_time_range_of_day`,
  `get_months_of_day_range` (strftime layout, sorted result).
- `kate.jsonutil`: `to_json` (compact, sorted keys, HTML-safe escapes; returns
  `"encoding failure"` when the value cannot be encoded) and `parse_json`.
- `kate.netutil`: `get_external_ip` (first IPv4 address of an interface that is up
  and not loopback; raises `OSError` if there is none) and `is_err_closing`.
- `kate.stack`: `get_stack`, `locate_panic`, `get_panic_stack` for readable stack
  traces and the location of the exception being handled.
- `kate.traceid`: `new`, `to_context` (returns a new read-only mapping holding the
  id) and `extract` (returns `""` when there is none).
- `kate.taskengine`: `TaskEngine(name, concurrency_level=0, logger=None, ctx=None)`
  runs each scheduled `Task` (or a callable taking the cancellation event) on its
  own thread. With a positive concurrency level, `schedule` blocks until a slot is
  free. `shutdown` sets the cancellation event, waits for running tasks, and
  raises `RuntimeError` if called twice; `schedule` returns `False` afterwards.
  Exceptions in tasks are logged.
- `kate.timerengine`: `TimerEngine(name, concurrency_level=0, logger=None, tick=1.0)`,
  a timing wheel of `RING_SIZE` buckets. `schedule(task, delay)` takes seconds or a
  `timedelta`, runs the task at once for a non-positive delay, and returns a
  `TimerTask` whose `cancel()` works until the task starts (or `None` once the
  engine is stopped).
- `kate.csvio`: `Reader(file_name, skip_line=0)` reads records (`read` raises
  `EOFError` at the end; the reader is also iterable), `count` gives the file's
  line count. `Writer(file_name, logger=None)` creates parent directories and
  offers `write`, `write_all` and `close`. Both are context managers.
- `kate.anonmap`: `AnonymousMap(size)`, a zero-filled anonymous memory region seen
  through `to_byte_slice`, `to_uint64_slice` and `to_float32_slice` memoryviews,
  all released by `close`.

## Examples

```python
from kate.text import to_snake, to_camel
from kate.conv import get_int

to_snake("aNewWorld")     # "a_new_world"
to_camel("a_new_world")   # "ANewWorld"
get_int("42")             # 42
get_int("oops")           # 0
```

```python
from dataclasses import dataclass, field
from kate.binding import bind

@dataclass
class Query:
    page: int = field(default=0, metadata={"query": "p"})
    ids: list[int] = field(default_factory=list, metadata={"query": "ids"})

q = Query()
bind(q, "query", {"p": "3", "ids": "1,2,3"})
# q.page == 3, q.ids == [1, 2, 3]
```

```python
from kate.timerengine import TimerEngine

engine = TimerEngine("jobs", 4)
engine.start()
handle = engine.schedule(lambda ctx: print("fired"), 5)
handle.cancel()
engine.stop()
```

## What it does not do

This is a library only. It has no command-line tool, and it does not provide
HTTP or gRPC servers, configuration-file loading, log file setup or database
access; the engines and helpers here are meant to be used inside a service
that supplies those.