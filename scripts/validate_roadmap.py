#!/usr/bin/env python3
"""Sanitize, parse and validate saved LLM output against the roadmap schema.

No LLM calls, purely deterministic. Useful for checking captured model
responses. Exit code 1 if any file fails.

Usage:
    python3 scripts/validate_roadmap.py response1.txt response2.json
"""
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ai.json_utils import parse_roadmap_json
from engine.roadmap_normalizer import count_topics
from engine.roadmap_validator import validate_roadmap


def check_file(path):
    """Returns (ok, message) for one file."""
    with open(path, encoding='utf-8') as f:
        raw = f.read()

    try:
        data = parse_roadmap_json(raw)
    except (json.JSONDecodeError, ValueError) as e:
        return False, f'parse failed: {e}'

    is_valid, reason = validate_roadmap(data)
    if not is_valid:
        return False, reason

    return True, f"{len(data['roadmap'])} weeks, {count_topics(data)} topics"


def main(paths):
    if not paths:
        print(__doc__)
        return 2

    failed = 0
    for path in paths:
        ok, message = check_file(path)
        status = 'PASS' if ok else 'FAIL'
        print(f"  {status} {path}: {message}")
        if not ok:
            failed += 1

    print("=" * 60)
    print(f"Total: {len(paths)} | Passed: {len(paths) - failed} | Failed: {failed}")
    print("=" * 60)
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
