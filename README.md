# stripaster

`stripaster` downloads the 50 horizontal strips of an image from a fragment
server, inflates each strip's pixel rows and pastes them, in sequence order,
into a single PNG file named `all.png`. Producer threads fetch strips and
consumer threads decode them, handing strips over through a bounded
last-in, first-out buffer.

It also ships the building blocks it is made of: a PNG CRC-32 routine,
in-memory zlib deflate/inflate helpers, a reader and writer for simple
three-chunk PNG files (IHDR, IDAT, IEND) and a bounded stack.

Only the standard library is needed.

## Installation

```
pip install .
```

Running the tests:

```
pip install .[test]
pytest
```

## Commands

### paster2

```
paster2 B P C X N
```

| Argument | Meaning                                         | Range    |
|----------|-------------------------------------------------|----------|
| `B`      | capacity of the shared strip buffer             | 1 – 50   |
| `P`      | number of producer threads fetching strips      | 1 – 20   |
| `C`      | number of consumer threads decoding strips      | 1 – 20   |
| `X`      | milliseconds each consumer sleeps per strip     | 0 – 1000 |
| `N`      | which image to fetch                            | 1 – 3    |

Each strip is requested from
`http://ece252-1.uwaterloo.ca:2530/image?img=N&part=K` for `K` from 0 to 49.
A failed fetch is retried; a strip that cannot be decoded is left as zero
bytes. The strips are placed by the sequence number in their
`X-Ece252-Fragment` response header and written as a 400 × 300 RGBA PNG to
`all.png`, after which the elapsed time is printed. Missing or out-of-range
arguments print a usage message and exit with status 1.

### pnginfo

```
pnginfo image.png
```

Prints `Image dimensions: W x H` and one line for each of the IHDR, IDAT and
IEND chunks whose stored CRC does not match the CRC computed from its type
and data. Exits with status 1 when no file is given, the file cannot be
opened, or its chunks cannot be read.

### fetch-fragment

```
fetch-fragment [URL]
```

Downloads one fragment (by default part 20 of image 1 from the server above)
into a 10 KiB in-memory buffer, reads its sequence number from the
`X-Ece252-Fragment` header and saves the body as `./output_<seq>_<pid>.png`.
HTTP error statuses still have their body saved; a body that does not fit
the buffer ends the command with status 1.

### stack-demo

```
stack-demo
```

Fills a three-item bounded stack counting down from `0xFF00`, pops it empty,
then does the same from `0xABCD`, printing each item pushed and popped.

## Library use

```python
from stripaster.png import SimplePNG, is_png

with open("all.png", "rb") as fh:
    data = fh.read()

if is_png(data):
    image = SimplePNG.from_bytes(data)
    print(image.width, image.height)
    print([chunk.is_crc_valid() for chunk in image.chunks])
```

```python
from stripaster.png import IHDR, Chunk, SimplePNG
from stripaster.zutil import mem_def

header = IHDR(width=1, height=1)
png = SimplePNG(
    Chunk.build("IHDR", header.to_bytes()),
    Chunk.build("IDAT", mem_def(b"\x00\xff\x00\x00\xff")),
    Chunk.build("IEND"),
)
png.write("pixel.png")
```

```python
from stripaster.zutil import mem_def, mem_inf

packed = mem_def(b"pixels" * 100, -1)
assert mem_inf(packed) == b"pixels" * 100
```

```python
from stripaster.crc import crc

print(hex(crc(b"IEND")))  # 0xae426082
```

```python
from stripaster.paster import PasterConfig, run

png = run(PasterConfig(buffer_size=5, producers=4, consumers=2, sleep_ms=0, image=1))
png.write("all.png")
```

`run` takes an optional `fetcher` callable (URL in, `stripaster.fetch.Fragment`
out) in place of the HTTP download.

## What it does not do

- The PNG reader handles only files made of exactly one IHDR, one IDAT and
  one IEND chunk; other chunk layouts are not supported.
- The strip geometry is fixed: 50 strips of 400 × 6 RGBA pixels. `paster2`
  does not take a server address or an output name; it always writes
  `all.png`.
- The output image is not checked or filtered; the inflated strip data is
  stored as it arrived.