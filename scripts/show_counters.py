#!/usr/bin/env python
"""
show_counters.py - print the configured day counters

Reads the same environment / .env as the server, so it is a quick way to check
a new HEALTHY_START_DATE or DOCTOR_START_DATE before restarting.

Usage (from project root):
  python scripts/show_counters.py
  python scripts/show_counters.py --date 2024-01-10 --lang pl
"""
import argparse, sys
from datetime import datetime

from healthcounters.config import settings
from healthcounters.counters.days import build_counters, parse_start_date
from healthcounters.api.utils import i18n


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--date", default=None, help="count as of this YYYY-MM-DD (default: today)")
    ap.add_argument("--lang", default="en", choices=sorted(i18n.LANGUAGES))
    args = ap.parse_args(argv)

    as_of = datetime.now().date()
    if args.date:
        as_of = parse_start_date(args.date)
        if as_of is None:
            ap.error(f"--date must be YYYY-MM-DD, got {args.date!r}")

    bad = settings.validate()
    labels = i18n.translation_values(settings.IS_HEALTHY, args.lang)
    titles = {"healthy": labels["HEALTHY_LABEL"], "doctor": labels["DOCTOR_LABEL"]}

    print(f"{settings.PERSON_NAME} - {labels['STATUS']} ({i18n.format_date(as_of.isoformat(), args.lang)})")
    for c in build_counters(as_of):
        since = i18n.format_date(c.start_date, args.lang)
        print(f"  {titles.get(c.key, c.key)}: {c.days} {labels['DAYS']} ({labels['SINCE']} {since})")
    return 1 if bad else 0


if __name__ == "__main__":
    sys.exit(main())
