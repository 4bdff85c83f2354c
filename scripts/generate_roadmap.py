#!/usr/bin/env python3
"""Generate a roadmap from the command line and print it as JSON.

Runs the same pipeline as POST /api/roadmap, including the local fallback.

Usage:
    python3 scripts/generate_roadmap.py "Become a Frontend Developer" --hours 10 --weeks 4
    python3 scripts/generate_roadmap.py "Learn Rust" --hours 6 --weeks 8 --offline
"""
import argparse
import json
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ai.local_generators import generate_fallback_roadmap
from ai.prompt_builder import topics_per_week
from models.roadmap_request import RequestValidationError, from_payload
from services import roadmap_service


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('goal', help='learning goal, e.g. "Become a Data Analyst"')
    parser.add_argument('--hours', type=int, default=10, help='study hours per week')
    parser.add_argument('--weeks', type=int, default=4, help='total duration in weeks')
    parser.add_argument('--skills', default='', help='comma-separated current skills')
    parser.add_argument('--offline', action='store_true',
                        help='skip the LLM and use the local template generator')
    parser.add_argument('--output', help='write JSON here instead of stdout')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING,
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    try:
        request = from_payload({
            'goal': args.goal,
            'weeklyHours': args.hours,
            'totalDuration': args.weeks,
            'skills': args.skills,
        })
    except RequestValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.offline:
        roadmap = generate_fallback_roadmap(
            request.goal, request.weekly_hours, request.total_weeks,
            topics_per_week(request.weekly_hours),
        )
        source = roadmap_service.SOURCE_FALLBACK
    else:
        roadmap, source = roadmap_service.generate(request)

    text = json.dumps(roadmap, indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text + '\n')
    else:
        print(text)

    topic_count = sum(len(w['topics']) for w in roadmap['roadmap'])
    print(f"{roadmap['totalWeeks']} weeks, {topic_count} topics ({source})",
          file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
