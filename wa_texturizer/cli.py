import argparse
import sys
import time
from pathlib import Path

from .config import DEFAULT_BACKGROUND_COLOR, DEFAULT_MASK_COLOR, DEFAULT_TERRAIN, RenderConfig, parse_hex_color
from .errors import TexturizerError
from .grass import split_grass
from .palette import generate_terrain_palette, load_palettes, save_palettes
from .pipeline import render
from .terrains import TERRAINS, ImageCache, load_image, load_terrain


def format_elapsed(milliseconds):
    seconds, millis = divmod(int(round(milliseconds)), 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


# ==============================================================================
# COMMANDS
# ==============================================================================
def cmd_render(args):
    config = RenderConfig(
        terrain=args.terrain,
        mask_color=parse_hex_color(args.mask_color),
        pad_top=args.pad_top,
        pad_bottom=args.pad_bottom,
        build_palette=args.indexed,
        transparent_background=args.transparent,
        background_color=parse_hex_color(args.background_color),
        resize=not args.no_resize,
    )

    palettes = None
    if args.indexed and not args.live_palette:
        if args.palettes is None:
            print("WARNING: --indexed without --palettes; building the palette live.")
        else:
            palettes = load_palettes(args.palettes)

    cache = ImageCache()
    source = load_image(args.source, cache)
    terrain = load_terrain(args.assets, config.terrain, cache)

    print(f"Texturizing {args.source} ({source.width}x{source.height}) with '{terrain.name}'...")
    start = time.perf_counter()
    result = render(source, terrain, config, palettes, live_palette=args.live_palette or palettes is None)
    png_bytes = result.to_png()
    elapsed = (time.perf_counter() - start) * 1000

    Path(args.output).write_bytes(png_bytes)
    kind = f"indexed, {len(result.palette)} colors" if result.palette is not None else "RGBA"
    print(f"Success! Saved {args.output} ({result.image.width}x{result.image.height}, {kind}) in {format_elapsed(elapsed)}")


def cmd_palettes(args):
    background = parse_hex_color(args.background_color)
    cache = ImageCache()
    palettes = {}
    for name in TERRAINS:
        folder = Path(args.assets) / name
        if not folder.is_dir():
            print(f"  [!] Missing terrain folder: {folder} -> skipped.")
            continue
        terrain = load_terrain(args.assets, name, cache)
        top, bottom = split_grass(terrain.grass)
        palette = generate_terrain_palette(background, [terrain.texture, top.pixels, bottom.pixels])
        palettes[name] = palette.colors
        print(f"  {name}: {len(palette)} colors")

    save_palettes(args.output, palettes)
    print(f"Success! Wrote {len(palettes)} terrain palettes to {args.output}")


def cmd_terrains(args):
    for name, index in TERRAINS.items():
        print(f"{index:3d}  {name}")


# ==============================================================================
# ENTRY POINT
# ==============================================================================
def build_parser():
    parser = argparse.ArgumentParser(
        prog="wa-texturizer",
        description="Texturize W:A map masks with terrain texture and grass.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("render", help="texturize a mask image")
    p.add_argument("source", help="mask image")
    p.add_argument("output", help="PNG file to write")
    p.add_argument("--assets", required=True, help="folder holding <terrain>/text.png and grass.png")
    p.add_argument("--terrain", default=DEFAULT_TERRAIN, choices=list(TERRAINS))
    p.add_argument("--mask-color", default=DEFAULT_MASK_COLOR, help="color to texturize (default: %(default)s)")
    p.add_argument("--background-color", default=DEFAULT_BACKGROUND_COLOR)
    bg = p.add_mutually_exclusive_group()
    bg.add_argument("--transparent", dest="transparent", action="store_true", default=True,
                    help="transparent background (default)")
    bg.add_argument("--opaque", dest="transparent", action="store_false",
                    help="fill the background with --background-color")
    p.add_argument("--pad-top", action="store_true", help="don't draw grass on the upper border")
    p.add_argument("--pad-bottom", action="store_true", help="don't draw grass on the lower border")
    p.add_argument("--indexed", action="store_true", help="write an indexed W:A map with a waLV chunk")
    pal = p.add_mutually_exclusive_group()
    pal.add_argument("--palettes", help="precomputed terrain palette JSON")
    pal.add_argument("--live-palette", action="store_true", help="compute the terrain palette from its images")
    p.add_argument("--no-resize", action="store_true", help="keep the texturized size as is")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("palettes", help="precompute terrain palettes")
    p.add_argument("output", help="JSON file to write")
    p.add_argument("--assets", required=True)
    p.add_argument("--background-color", default=DEFAULT_BACKGROUND_COLOR)
    p.set_defaults(func=cmd_palettes)

    p = sub.add_parser("terrains", help="list known terrains")
    p.set_defaults(func=cmd_terrains)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except TexturizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
