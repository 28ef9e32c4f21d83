# xnetframe

Parts for building network servers in Python. The package uses only the standard library.

## Modules

- `xnetframe.properties`
  - `Properties` stores string values keyed by section and name.
  - Reading: `get_string`, `get_int` and `get_float`. The last two take the leading number of the stored text, or give 0.
  - Other calls: `has_property`, `delete_property`, `clear` and `len()`.
  - Values come from `Loader` objects that you attach with `add_loader`.
  - `add_property_ex` and `delete_property_ex` also write the change through the named loader. They raise `PropertiesError` if no loader has that name.
- `xnetframe.file_loader`
  - `FileLoader` is a `Loader` for INI-style files. It reads `[section]` headers and `key = value` lines.
  - A line starting with `#` is a comment, and text after `#` is ignored.
  - `include other.ini` reads another file in place. An include that refers back to a file already being read is rejected.
  - A malformed line raises `IniFormatError`, which carries the path and line number.
  - `set_property` and `reset_property` add, replace or remove a key in the file.
  - `sections()` lists the sections seen by the last load.
- `xnetframe.log`
  - `Log` formats printf-style messages with `log` and `log_ln`, the latter adding CR LF. It queues them and hands them to `Viewer` objects.
  - Delivery happens either on a background thread started with `start()` and ended with `stop()`, or one line at a time with `output_one()`.
  - Bypass viewers see every line. The other viewers only see lines that pass the positive and negative text filters.
  - Messages above the `LogLevel` threshold are dropped. `set_properties` reads the threshold from `LogService` / `LogLevel`, for example `LOG_LEVEL_2`.
  - `dump_mem` logs bytes as hex.
  - `FunctionLog` is a context manager that logs `Enter ...` and `Leave ...`. If it is given a `Profiler`, it also logs the elapsed time.
- `xnetframe.message_digest`
  - `MessageDigest` computes MD5 incrementally, with `update`, `digest` and `reset`.
  - `md5()` is the one-shot form.
- `xnetframe.message_handler`
  - `MessageHeader` is a length and a message id, packed as two little-endian 32-bit integers. It has `pack` and `unpack`.
  - `MessageHandler` is an abstract handler for one message id.
  - `MessageHandlerFactory` registers handlers by id, with `add`, `get`, `delete`, `clear`, `len()`, `in` and iteration.
- `xnetframe.inet_address`
  - `InetAddress` is an IPv4 address and port. It is set from a dotted address or a resolvable host name.
  - A name that cannot be resolved raises `UnknownHostError`.
- `xnetframe.monitor`: `Monitor`, a re-entrant lock usable with `with`.
- `xnetframe.profiler`: `Profiler`, which provides event counters, deadlines, accumulated intervals and millisecond durations.

## Installation

```
pip install .
```

## Examples

```python
from xnetframe.properties import Properties
from xnetframe.file_loader import FileLoader

props = Properties()
loader = FileLoader()
loader.set_file("server.ini")
props.add_loader(loader)
props.load_properties()

port = props.get_int("IocpService", "Port")
host = props.get_string("IocpService", "Host")
```

```python
from xnetframe.log import Log, LogLevel, Viewer

class PrintViewer(Viewer):
    def view(self, date, line):
        print(date, line, end="")

log = Log(LogLevel.LEVEL_1)
log.add_viewer(PrintViewer("console"))
log.start()
log.log_ln(LogLevel.LEVEL_0, "listening on port %d", 9000)
log.stop()
```

```python
from xnetframe.message_digest import md5

md5(b"abc").hex()  # '900150983cd24fb0d6963f7d28e17f72'
```

## What it does not do

The package has no server of its own:

- It does not open listening sockets.
- It does not manage client sessions.
- It does not dispatch received messages to handlers.

You use `MessageHandlerFactory`, `MessageHeader` and `InetAddress` from your own networking code.

No concrete `Viewer` is included. To send log lines to the console or to files, subclass `Viewer`.

## Running the tests

```
pip install .[test]
pytest
```