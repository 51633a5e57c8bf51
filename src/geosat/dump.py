"""
dump.py

Text dump of decoded images, and the `geosat-dump` command line tool.

    geosat-dump [--contents] [--area X,Y,W,H] [-v] FILE[:DATASET]...
"""
import argparse
import sys
from typing import Optional, Sequence, TextIO

from geosat.errors import GeosatError
from geosat.image.geometry import pixel_size, seviri_dx, seviri_dy
from geosat.io.safh5 import is_safh5, read_safh5
from geosat.utils import configure_logging, safe_log_exception


def dump_image(img, with_contents: bool = False, out: Optional[TextIO] = None) -> None:
    """Write a summary of `img` (and optionally every pixel) to `out`."""
    out = sys.stdout if out is None else out
    data = img.data
    out.write(f"{img.name} {img.datetime_str()}\n")
    out.write(f" proj: {img.projection} ch.id: {img.channel_id} sp.id: {img.spacecraft_id}\n")
    out.write(f" size: {data.columns}x{data.lines} factor: {img.column_res}x{img.line_res}"
              f" offset: {img.column_offset}x{img.line_offset}\n")
    out.write(" Images: \n")
    out.write(f"  \t{data.columns}x{data.lines} {data.bpp}bpp *{data.slope}+{data.offset}"
              f" decscale: {data.decimal_scale()}"
              f" PSIZE {pixel_size(img):g} DX {seviri_dx(img):g} DXY {seviri_dy(img):g}"
              f" CHID {img.channel_id}\n")

    if with_contents:
        out.write("Coord\tUnscaled\tScaled\n")
        for line in range(data.lines):
            for col in range(data.columns):
                out.write(f"{col}x{line}\t{data.unscaled(col, line)}\t{data.scaled(col, line)}\n")


def _parse_area(text: str):
    try:
        x, y, w, h = (int(v) for v in text.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"area must be X,Y,WIDTH,HEIGHT, got {text!r}")
    return x, y, w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geosat-dump',
        description='Print the metadata (and optionally the pixels) of geostationary satellite images.')
    parser.add_argument('files', nargs='+', metavar='FILE', help='SAF HDF5 file, optionally FILE:DATASET')
    parser.add_argument('--contents', action='store_true', help='also dump every pixel value')
    parser.add_argument('--area', type=_parse_area, default=None,
                        help='crop to X,Y,WIDTH,HEIGHT before dumping')
    parser.add_argument('-v', '--verbose', action='store_true', help='verbose logging')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    failed = 0
    for filename in args.files:
        if not is_safh5(filename):
            safe_log_exception('unsupported input', GeosatError(f"{filename} is not a SAF HDF5 file"),
                               file=filename)
            failed += 1
            continue
        try:
            for img in read_safh5(filename):
                if args.area is not None:
                    img = img.crop(*args.area)
                dump_image(img, with_contents=args.contents)
        except (GeosatError, OSError, KeyError) as e:
            safe_log_exception('cannot dump images', e, file=filename)
            failed += 1
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
