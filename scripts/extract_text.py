from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fitcheck.core.config import settings  # noqa: E402
from fitcheck.extraction.fetch import DocumentFetcher  # noqa: E402
from fitcheck.extraction.validation import validate  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fetch a job posting or resume URL and show the text the analyzer would see."
    )
    parser.add_argument("--url", required=True, help="Job posting or resume URL")
    parser.add_argument("--role", choices=["job", "resume"], default="job", help="Which validation rules to apply")
    parser.add_argument("--out", help="Write the extracted text to this file instead of stdout")
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Strip tags from the whole page instead of narrowing to the main content container.",
    )
    args = parser.parse_args()

    fetcher = DocumentFetcher(
        timeout_s=settings.fetch_timeout_s,
        max_bytes=settings.max_upload_bytes,
        narrow_html=not args.fast,
    )
    text = asyncio.run(fetcher.fetch_text(args.url, role=args.role))
    verdict = validate(text, args.role)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    print(f"\n[{len(text)} chars, verdict={verdict.value}]", file=sys.stderr)


if __name__ == "__main__":
    main()
