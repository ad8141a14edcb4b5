# nvgd

`nvgd` is a set of small, composable filters for looking at text
resources such as log files, CSV/TSV data and Markdown documents. Each
filter reads a stream of bytes line by line and produces a new stream,
so filters can be chained one after another, like a shell pipeline.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Streams

Filters work on `nvgd.filter.FilterStream`. A stream is made from a
binary file-like object or from an iterable of byte chunks, and offers
`read`, `readline`, line iteration and `close`. It carries an `options`
dictionary; the stream a filter returns (made with `wrap`) shares those
options, and closing it closes the streams it was built on. It can be
used as a context manager.

## Filters

Each filter lives in the `nvgd.filters` package and has a factory taking
a `FilterStream` and a `Params` mapping of string options. The factory
registers itself under its filter name when its module is imported;
importing `nvgd.pipeline` imports all of them.

| Filter      | Module                       | Factory         | Options |
|-------------|------------------------------|-----------------|---------|
| `count`     | `nvgd.filters.count`         | `new_count`     | none |
| `cut`       | `nvgd.filters.cut`           | `new_cut`       | `list`, `delim` (default tab), `white` |
| `grep`      | `nvgd.filters.grep`          | `new_grep`      | `re`, `match`, `number`, `context`, `field`, `delim` |
| `head`      | `nvgd.filters.head`          | `new_head`      | `start` (default 0), `limit` (default 10) |
| `hash`      | `nvgd.filters.digest`        | `new_hash`      | `algorithm` (md5, sha1, sha256, sha512), `encoding` (hex, base64, binary) |
| `jsonarray` | `nvgd.filters.jsonarray`     | `new_jsonarray` | none |
| `pager`     | `nvgd.filters.pager`         | `new_pager`     | `eop` (required), `pages` (default `1`), `num` |
| `tail`      | `nvgd.filters.tail`          | `new_tail`      | `limit` (default 10) |
| `markdown`  | `nvgd.filters.markdown_html` | `new_markdown`  | none |

Some notes on their behaviour:

- `cut` takes a 1-based field list such as `1,3-5,7-` or `-2`; a range
  written backwards (`5-3`) selects fields in reverse order. With
  `white:true` fields are split at runs of spaces and tabs.
- `grep` trims line ends before matching. `match:false` keeps the lines
  that do not match, `number:true` prefixes `N: `, `context:N` adds N
  lines around each hit, and `field:N` matches only the N-th field.
- `pager` ends a page at each line matching `eop`. Negative page numbers
  count from the end, ranges like `2-4` are allowed, and `num:true` puts
  a `(page N)` line before each page.
- `tail` on a stream over a seekable file uses `RTail`, which scans the
  file backwards from its end instead of reading all of it.
- `markdown` renders the document to an HTML page; links to local
  `doc/*.md` files get `?markdown` added so that they render too.

Plain functions are available as well: `count_lines`, `cut_lines`,
`split_white`, `parse_selectors`, `grep_lines`, `head_lines`, `digest`,
`json_array_lines`, `parse_pages`, `page_lines`, `tail_lines` and
`render_markdown`.

Option values are strings. `Params` converts them on request and falls
back to the default when a value is missing or malformed:

```python
from nvgd.filter import Params

params = Params({"limit": "5", "number": "true"})
params.get_int("limit", 10)      # 5
params.get_bool("number", False) # True
params.get_str("delim", "\t")    # "\t"
```

Filters are looked up by name with `nvgd.filter.find`, which returns
`None` for an unknown name, and added with `nvgd.filter.register`;
registering a name twice raises `DuplicateFilterError`. Invalid options
(an unknown cut list item, a missing `eop`, an unknown hash algorithm)
raise `ValueError`.

## Filter chains from query strings

A chain of filters is written as a query string: each key is a filter
name and its value holds that filter's options as `key:value` pairs
separated by `;`.

```python
import io

from nvgd.filter import FilterStream
from nvgd.pipeline import apply_filters
from nvgd.qparams import parse_query

source = FilterStream(io.BytesIO(b"ok\nERROR one\nok\nERROR two\n"))
with apply_filters(parse_query("grep=re:ERROR;number:true&head=limit:1"), source) as out:
    print(out.read().decode())   # "2: ERROR one\n"
```

`parse_query` keeps the order and repetitions of parameters and raises
`QueryParseError` on a bad `%` escape. `apply_filter` runs one filter and
raises `FilterNotFoundError` for an unknown name; `parse_filter_params`
decodes the `key:value;...` part on its own. `split_refresh`,
`split_download` and `split_all` take the special keys `refresh`,
`download` and `all` out of a chain, and `is_html` tells whether the last
filter produces HTML.

`DefaultFilters` holds filter chains keyed by path prefix; `lookup`
returns the chain for a path and `apply` runs it over a stream.

## Aliases and errors

`nvgd.alias.Aliases` is an ordered list of `Alias` entries that turn a
short path prefix into a protocol URL (`apply`) and back (`rewrite_path`).
`DEFAULT_ALIASES` holds the built-in ones, such as `files/` for
`file:///`, and `merge_map` appends more from a mapping.

`nvgd.errors.to_http_error` maps an exception to a response body and
status code: an `HTTPError` gives its own, a missing file 404, a
permission error 403, anything else 500.

## Configuration

`nvgd.config.load_config` reads a YAML file into the configuration that
`root()` returns. An empty name or a missing file keeps the defaults;
invalid content raises `ConfigError`.

```yaml
addr: "0.0.0.0:9280"
error_log: "(stderr)"
access_log: "(discard)"
default_filters:
  "file:///var/":
    - tail
  "file:///tmp/":
    - head
    - tail=limit:5
aliases:
  logs/: "file:///var/log/"
filters:
  markdown:
    custom_css_urls:
      - /static/doc.css
```

`Config.access_log()` and `Config.error_log()` return loggers writing to
a file path or to one of `(discard)`, `(stderr)` and `(stdout)`. Running
Python in development mode (`-X dev`) switches the defaults to
`127.0.0.1:9280` and an access log on standard output.

Components with settings of their own register them with
`register_filter` or `register_protocol`, and the `filters:` and
`protocols:` sections fill them in; an unregistered name there is an
error. The Markdown filter registers its `custom_css_urls` this way.

## What the package does not do

`nvgd` has no command and no HTTP server. It does not open resources by
itself: reading files, directories or other sources and serving the
results is left to the calling code, which passes a `FilterStream` in
and uses the configuration, aliases, query handling and error mapping
above around it. Table renderers (HTML or plain text), LTSV, SQL and
chart filters are not included.