# datatips/tokenize_cli.py

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from .settings import settings
from .text_preprocessing import CaseMode, Tokenizer, clean_text


def tokenize_single(raw_text: str, case_mode: str, delimiter: str) -> Dict[str, Any]:
    """
    Returns a dict:
      {
        "case_mode": "lower" | "upper" | "unchanged",
        "cleaned_text": str,
        "tokens": [str, ...],
        "n_tokens": int,
      }
    """
    mode = CaseMode(case_mode)

    cleaned = clean_text(raw_text, mode)
    tokens = Tokenizer(delimiter)(cleaned)

    return {
        "case_mode": mode.value,
        "cleaned_text": cleaned,
        "tokens": tokens,
        "n_tokens": len(tokens),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Normalize a social-media style text and split it into tokens."
    )
    parser.add_argument(
        "--text",
        type=str,
        required=False,
        help="Raw text to tokenize. If omitted, the script reads from stdin.",
    )
    parser.add_argument(
        "--case",
        choices=[m.value for m in CaseMode],
        default=settings.case_mode.value,
        help="Case folding applied before tokenizing.",
    )
    parser.add_argument(
        "--delimiter",
        type=str,
        default=settings.delimiter,
        help="Token delimiter (default: a single space).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print result as JSON instead of human-readable text.",
    )

    args = parser.parse_args(argv)

    if args.text is not None:
        raw_text = args.text
    else:
        raw_text = sys.stdin.read()

    if not raw_text.strip():
        print("[ERROR] Empty input text. Nothing to tokenize.")
        return 1

    result = tokenize_single(raw_text, args.case, args.delimiter)

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print("\n[RESULT]")
        print(f"Tokens ({result['n_tokens']}): {' | '.join(result['tokens'])}")
        print(f"Case mode: {result['case_mode']}")
        print("\n[DEBUG] Cleaned text preview:")
        print(result["cleaned_text"][:400])
    return 0


if __name__ == "__main__":
    sys.exit(main())
