import argparse
import logging

from classtime.generator import generate_timetable
from classtime.io_utils import load_document, save_report_json
from classtime.scheduling.evaluation import summary
from classtime.synthetic import generate_document


def main():
    p = argparse.ArgumentParser(description="ClassTime – Greedy Weekly Class Timetabling")
    # Input modes
    p.add_argument('--input', type=str, help='Input document JSON (cohorts, instructors, rooms, config)')
    p.add_argument('--generate', type=int, default=None, help='Generate a synthetic document with N cohorts')
    p.add_argument('--seed', type=int, default=42)

    # Output
    p.add_argument('--out_report', type=str, default=None, help='Write the full report as JSON')
    p.add_argument('--verbose', action='store_true')
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='[%(levelname)s] %(name)s: %(message)s')

    if args.input:
        document = load_document(args.input)
    elif args.generate is not None:
        document = generate_document(n_cohorts=args.generate, seed=args.seed)
    else:
        raise SystemExit("Provide --input or --generate N")

    report = generate_timetable(document)

    print(summary(report, document))
    for c in report.conflicts:
        print(f"[{c.severity}] {c.kind}: {c.message}")

    if args.out_report:
        save_report_json(args.out_report, report)
        print(f"Saved: {args.out_report}")


if __name__ == '__main__':
    main()
