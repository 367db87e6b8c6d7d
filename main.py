"""Generate one creative from the command line."""

import argparse
import json
import sys
from pathlib import Path

from creative_lab.app import build_creative_service, configure_logging
from creative_lab.errors import CreativeLabError
from creative_lab.models import CreativeFormat


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a marketing creative (copy + image).")
    parser.add_argument("text", nargs="?", default="", help="Product/service information")
    parser.add_argument("--occasion", default="", help="Occasion or theme, e.g. 'Diwali'")
    parser.add_argument(
        "--format",
        dest="creative_format",
        default=CreativeFormat.INSTAGRAM_POST.value,
        choices=[f.value for f in CreativeFormat],
    )
    parser.add_argument("--image", help="Reference image path or URL (switches to edit mode)")
    parser.add_argument("--out-dir", default=".", help="Where to write the image")
    args = parser.parse_args(argv)

    configure_logging()
    service = build_creative_service()

    try:
        output = service.generate(args.text, args.occasion, args.creative_format, args.image)
    except CreativeLabError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    out_path = Path(args.out_dir) / output.download_filename()
    out_path.write_bytes(output.image_bytes())

    print("\n=== CREATIVE ===")
    print(json.dumps(output.json.to_dict(), indent=2, ensure_ascii=False))
    print(f"\nImage: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
