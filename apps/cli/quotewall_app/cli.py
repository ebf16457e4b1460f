"""CLI entrypoints for browsing quotes, composing wallpapers, and managing the API key."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from quotewall_core import (
    OPENAI_API_KEY,
    ImageGenerationError,
    OpenAIImageProvider,
    SecretStore,
    build_doctor_payload,
    load_config,
    style_from_config,
)
from quotewall_core.logging_setup import configure_logging, get_logger
from quotewall_quotes import Quote, QuoteError, QuoteSource
from quotewall_renderer import (
    CanvasSize,
    Color,
    CompositionError,
    FontLibrary,
    FontWeight,
    TextAlignment,
    WallpaperCompositor,
    get_size,
    list_sizes,
    save_image,
)
from quotewall_renderer.sizes import SIZES

logger = get_logger("cli")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _fail(message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return 1


def _quote_source(args: argparse.Namespace) -> QuoteSource:
    cfg = load_config()
    path = getattr(args, "quotes_file", None) or cfg.quotes.path
    return QuoteSource(Path(path).expanduser() if path else None)


def cmd_quotes_list(args: argparse.Namespace) -> int:
    if args.limit is not None and args.limit < 0:
        return _fail(f"--limit must be zero or more, got {args.limit}")
    source = _quote_source(args)
    quotes = source.search(args.search or "")
    if args.category:
        wanted = {q.id for q in source.by_category(args.category)}
        quotes = [q for q in quotes if q.id in wanted]
    if args.limit is not None:
        quotes = quotes[: args.limit]
    _print_json({"error": source.error_message, "quotes": [q.to_dict() for q in quotes]})
    return 0


def cmd_quotes_categories(args: argparse.Namespace) -> int:
    source = _quote_source(args)
    categories = source.top_categories(args.top) if args.top else source.all_categories()
    _print_json(categories)
    return 0


def cmd_sizes(_args: argparse.Namespace) -> int:
    _print_json(
        [
            {"name": s.name, "display_name": s.display_name, "width": s.width, "height": s.height}
            for s in (SIZES[name] for name in list_sizes())
        ]
    )
    return 0


def _resolve_quote(args: argparse.Namespace) -> Quote | None:
    if args.text:
        return Quote(text=args.text, author=args.author or None)
    source = _quote_source(args)
    if args.quote_id:
        return source.get(args.quote_id)
    return source.random_quote()


def cmd_compose(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        quote = _resolve_quote(args)
    except QuoteError as exc:
        return _fail(str(exc))
    if quote is None:
        return _fail(f"quote not found: {args.quote_id}")

    style = style_from_config(cfg)
    try:
        if args.width is not None or args.height is not None:
            size = CanvasSize.custom(
                args.width if args.width is not None else style.size.width,
                args.height if args.height is not None else style.size.height,
            )
        else:
            size = get_size(args.size) if args.size else style.size
        style = replace(
            style,
            size=size,
            background_color=Color.parse(args.color) if args.color else style.background_color,
            font_size=args.font_size if args.font_size is not None else style.font_size,
            font_weight=FontWeight.from_name(args.weight) if args.weight else style.font_weight,
            alignment=TextAlignment(args.align) if args.align else style.alignment,
        )
    except ValueError as exc:
        return _fail(str(exc))

    if args.background:
        try:
            with Image.open(Path(args.background).expanduser()) as img:
                style = replace(style, background_image=img.convert("RGBA"))
        except (OSError, UnidentifiedImageError) as exc:
            return _fail(f"cannot read background image: {exc}")
    elif args.ai_background:
        provider = OpenAIImageProvider(config=cfg.image_generation)
        try:
            style = replace(style, background_image=provider.generate_background(quote))
        except ImageGenerationError as exc:
            return _fail(str(exc))

    compositor = WallpaperCompositor(FontLibrary(args.font_path or cfg.editor.font_path))
    try:
        image = compositor.compose(quote, style)
    except CompositionError as exc:
        logger.error("compose failed: %s", exc, extra={"event": "compose_failed"})
        return _fail(str(exc))

    try:
        out = save_image(image, Path(args.out).expanduser())
    except (OSError, ValueError) as exc:
        return _fail(str(exc))

    _print_json(
        {
            "success": True,
            "quote_id": quote.id,
            "size": {"name": style.size.name, "width": image.width, "height": image.height},
            "background": "image" if style.background_image is not None else style.background_color.hex,
            "output": str(out),
        }
    )
    return 0


def cmd_api_key_set(args: argparse.Namespace) -> int:
    key = args.key.strip()
    if not key:
        return _fail("API key must not be empty")
    SecretStore().set(OPENAI_API_KEY, key)
    _print_json({"success": True, "configured": True})
    return 0


def cmd_api_key_delete(_args: argparse.Namespace) -> int:
    ok = SecretStore().delete(OPENAI_API_KEY)
    _print_json({"success": ok, "configured": False})
    return 0


def cmd_api_key_status(_args: argparse.Namespace) -> int:
    _print_json({"configured": SecretStore().has(OPENAI_API_KEY)})
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quotewall", description="Quote wallpaper composer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    quotes_cmd = sub.add_parser("quotes", help="Browse the quote list")
    quotes_sub = quotes_cmd.add_subparsers(dest="quotes_cmd", required=True)
    list_cmd = quotes_sub.add_parser("list", help="List quotes, optionally filtered")
    list_cmd.add_argument("--search", default=None, help="Match text, author, or category")
    list_cmd.add_argument("--category", default=None)
    list_cmd.add_argument("--limit", type=int, default=None)
    list_cmd.add_argument("--quotes-file", default=None, help="Override quotes JSON path")
    list_cmd.set_defaults(func=cmd_quotes_list)
    cat_cmd = quotes_sub.add_parser("categories", help="List category labels")
    cat_cmd.add_argument("--top", type=int, default=None, help="Most frequent N categories")
    cat_cmd.add_argument("--quotes-file", default=None, help="Override quotes JSON path")
    cat_cmd.set_defaults(func=cmd_quotes_categories)

    sizes_cmd = sub.add_parser("sizes", help="List canvas presets")
    sizes_cmd.set_defaults(func=cmd_sizes)

    compose_cmd = sub.add_parser("compose", help="Render a quote wallpaper")
    source = compose_cmd.add_mutually_exclusive_group()
    source.add_argument("--quote-id", default=None)
    source.add_argument("--text", default=None, help="Compose ad-hoc text instead of a listed quote")
    compose_cmd.add_argument("--author", default=None, help="Attribution for --text")
    compose_cmd.add_argument("--quotes-file", default=None, help="Override quotes JSON path")
    compose_cmd.add_argument("--size", choices=list_sizes(), default=None)
    compose_cmd.add_argument("--width", type=int, default=None)
    compose_cmd.add_argument("--height", type=int, default=None)
    compose_cmd.add_argument("--color", default=None, help="Base color, e.g. #007AFF")
    compose_cmd.add_argument("--font-size", type=float, default=None)
    compose_cmd.add_argument("--weight", choices=[w.name.lower() for w in FontWeight], default=None)
    compose_cmd.add_argument("--align", choices=[a.value for a in TextAlignment], default=None)
    compose_cmd.add_argument("--font-path", default=None, help="TrueType/OpenType font file")
    background = compose_cmd.add_mutually_exclusive_group()
    background.add_argument("--background", default=None, help="Background image file")
    background.add_argument("--ai-background", action="store_true", help="Generate background via OpenAI")
    compose_cmd.add_argument("--out", required=True, help="Output path (.png, .jpg, .webp)")
    compose_cmd.set_defaults(func=cmd_compose)

    key_cmd = sub.add_parser("api-key", help="Manage the OpenAI API key")
    key_sub = key_cmd.add_subparsers(dest="api_key_cmd", required=True)
    set_cmd = key_sub.add_parser("set", help="Store the API key")
    set_cmd.add_argument("key")
    set_cmd.set_defaults(func=cmd_api_key_set)
    del_cmd = key_sub.add_parser("delete", help="Remove the stored API key")
    del_cmd.set_defaults(func=cmd_api_key_delete)
    status_cmd = key_sub.add_parser("status", help="Report whether a key is stored")
    status_cmd.set_defaults(func=cmd_api_key_status)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and configuration diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
