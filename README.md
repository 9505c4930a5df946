# atcmd

Tools for the receiving side of a link to a device that speaks AT commands
(cellular modems, Wi-Fi modules and the like). The package splits a stream of
received bytes into responses, error result codes, unsolicited result codes
(URCs) and data prompts, and models the errors such a device can report.

## Installation

```
pip install atcmd
```

The package has no runtime dependencies.

## Digesting a byte stream

`atcmd.digester.AtDigester` looks at the bytes received so far and returns a
`DigestResult` together with the number of bytes it used. Drop those bytes
from the front of your buffer and call `digest` again when more data arrives.

```python
from atcmd.digester import AtDigester
from atcmd.parser import DigestKind, urc_helper

digester = AtDigester(urc_helper(b"+CIEV"))

buf = bytearray(b"AT+CPIN?\r\r\n+CPIN: READY\r\n\r\nOK\r\n")
result, used = digester.digest(buf)
del buf[:used]

if result.kind is DigestKind.RESPONSE:
    print(result.payload)  # b'+CPIN: READY'
```

The optional first argument of `AtDigester` is a URC parser: a callable that
takes the buffer and returns `(urc_bytes, length)`, raising `NoMatch` or
`ParseIncomplete` otherwise. `urc_helper(token)` builds one for URCs of the
form `\r\n<token>\r\n` or `\r\n<token>:...\r\n`.

A `DigestResult` has a `kind` (`DigestKind.NONE`, `URC`, `RESPONSE` or
`PROMPT`) and a `payload`:

- `URC`: the URC bytes, trimmed of surrounding whitespace
- `RESPONSE`: the response body as bytes on success, or an `InternalError`
  for an error result code
- `PROMPT`: the prompt byte as an integer
- `NONE`: `None`

Leading spaces and echoed commands are consumed before anything else. A
`NONE` result with a non-zero count means only such echo or spacing was used;
a count of zero means nothing could be taken yet.

Recognised endings:

- success: `OK`, `CONNECT`
- errors: `ERROR`, `COMMAND NOT SUPPORT`, `+CME ERROR: <n>`,
  `+CMS ERROR: <n>`, `MODEM ERROR: <n>`, `NO CARRIER`, `BUSY`,
  `NO ANSWER`, `NO DIALTONE`, `NA`
- prompts: `>` and `@`, followed only by whitespace

For `+CME ERROR` the `InternalError` carries the numeric code as an `int`;
`MODEM ERROR` is reported as CME code 100 and `NA` as CME code 3.

Device-specific replies are tried before the standard ones by the digesters
returned from `with_custom_success`, `with_custom_error` and
`with_custom_prompt`. Each takes a callable that returns `(data, length)`
(`(prompt_byte, length)` for prompts) or raises `NoMatch` or
`ParseIncomplete`. A custom error becomes an `InternalError` of kind
`ErrorKind.CUSTOM` holding the matched bytes.

## Parsing helpers

`atcmd.parser` exposes the building blocks used by the digester: `echo`,
`take_until_including`, `urc_helper`, `success_response`, `prompt_response`,
`error_response`, `trim_ascii_whitespace` and `trim_start_ascii_space`.
Parsers raise `ParseIncomplete` when more input may still produce a match and
`NoMatch` when the input cannot match.

## Errors

`atcmd.errors` holds the error model:

- `CmsError`: message service errors (3GPP TS 27.005), built with
  `CmsError.from_code(332)` or `CmsError.from_msg(b"Network timeout")`;
  unknown values map to `CmsError.UNKNOWN`
- `ConnectionFailure`: `NO_CARRIER`, `NO_DIALTONE`, `BUSY`, `NO_ANSWER`
  and `UNKNOWN`
- `ErrorKind`: the kinds of failure, from `READ` and `WRITE` to `CUSTOM`
- `InternalError`: an error as found in the byte stream, with `kind` and
  `detail`
- `AtError`: an exception with `kind` and `detail`, built from an
  `InternalError` with `AtError.from_internal(...)`; custom matches lose
  their bytes in the conversion

`atcmd.helpers.lossy_str(data)` renders bytes as an escaped, quoted string
when they are valid UTF-8 and as a list of byte values otherwise.

## Configuration and timing

`atcmd.config.Config` is an immutable set of timings, in seconds: command
cooldown (0.02), transmit timeout (1.0), flush timeout (1.0), and the
function that computes a response deadline from the send instant and the
timeout (`default_response_timeout`, which adds them). `with_tx_timeout`,
`with_flush_timeout`, `with_cmd_cooldown` and `with_response_timeout` return
updated copies; negative durations raise `ValueError`.

`BlockingTimer.after(seconds)` starts a deadline on the monotonic clock that
can be checked with `expired()` or waited on with `wait()`.

## Serialized lengths

`atcmd.lengths` gives the worst-case serialized length of AT arguments:
`atat_len("u8")`, `string_len(128)`, `option_len(...)`, `vec_len(...)`,
`hex_str_len("u32")` and `hex_str_array_len(16)`.

## What the package does not do

The package does not open serial ports, write commands to a device or wait
for replies: there is no client that sends AT commands, and no way to build
command strings or decode response parameters into objects. `Config` and
`BlockingTimer` hold the timings such a client would use, and the digester
handles the bytes you feed it, but reading and writing the link is up to you.
CME error codes are kept as plain numbers, and verbose (text) `+CME ERROR` or
`+CMS ERROR` messages are not recognised as error responses.

## Running the tests

```
pip install atcmd[test]
pytest
```