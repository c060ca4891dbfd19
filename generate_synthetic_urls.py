#!/usr/bin/env python3
"""
Synthetic URL file generator for burst aggregator benchmarks.

Writes one URL per line. Hostnames are drawn from a fixed pool of domains
with a skewed (Zipf-like) distribution, so the result file has a long tail.
Optionally injects malformed lines, which make the worker that reads them
fail and the run end without output.
"""

import argparse
import random
import sys

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB

SUBDOMAINS = ["www", "cdn", "api", "static", "m", "img.eu"]
TLDS = ["com", "org", "net", "io", "dev"]


def build_domains(num_domains: int, rng: random.Random) -> list[str]:
    """Create ``num_domains`` distinct registrable domains like ``site0042.io``."""
    return [f"site{i:04d}.{rng.choice(TLDS)}" for i in range(num_domains)]


def generate_url(domain: str, rng: random.Random) -> str:
    """One URL on ``domain``, sometimes behind a subdomain."""
    host = domain
    if rng.random() < 0.7:
        host = f"{rng.choice(SUBDOMAINS)}.{domain}"
    scheme = rng.choice(["http", "https"])
    return f"{scheme}://{host}/page/{rng.randrange(10_000)}"


def generate_synthetic_dataset(
    output_path: str,
    num_lines: int,
    num_domains: int,
    malformed: int,
    seed: int,
) -> int:
    """
    Generate a URL file, streaming line by line.

    Returns:
        Total number of lines written.
    """
    rng = random.Random(seed)
    domains = build_domains(num_domains, rng)
    # Zipf-ish weights: domain k is drawn proportionally to 1/(k+1)
    weights = [1.0 / (k + 1) for k in range(num_domains)]
    malformed_at = set(rng.sample(range(num_lines), min(malformed, num_lines)))

    total_lines = 0
    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for i in range(num_lines):
            if i in malformed_at:
                f.write("not a url\n")
            else:
                domain = rng.choices(domains, weights=weights)[0]
                f.write(generate_url(domain, rng) + "\n")
            total_lines += 1

            if (i + 1) % 1_000_000 == 0:
                print(f"  Generated {i + 1:,}/{num_lines:,} lines...", file=sys.stderr)

    return total_lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic file of URLs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 5M URLs over 2000 domains
  python generate_synthetic_urls.py --out data/urls.txt --lines 5000000 --domains 2000

  # Same, with one malformed line (the run will finish without output)
  python generate_synthetic_urls.py --out data/urls_bad.txt --lines 5000000 --malformed 1
""",
    )

    parser.add_argument("--out", required=True, help="Output file path")
    parser.add_argument(
        "--lines",
        type=int,
        default=1_000_000,
        help="Number of lines (default: 1000000)",
    )
    parser.add_argument(
        "--domains",
        type=int,
        default=500,
        help="Number of distinct registrable domains (default: 500)",
    )
    parser.add_argument(
        "--malformed",
        type=int,
        default=0,
        help="Number of malformed lines to inject (default: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    if args.lines < 0:
        parser.error("--lines must not be negative")
    if args.domains < 1:
        parser.error("--domains must be at least 1")
    if args.malformed < 0:
        parser.error("--malformed must not be negative")

    print(f"Output: {args.out}", file=sys.stderr)
    print(f"Lines: {args.lines:,}  Domains: {args.domains:,}  Malformed: {args.malformed}", file=sys.stderr)

    total_lines = generate_synthetic_dataset(
        output_path=args.out,
        num_lines=args.lines,
        num_domains=args.domains,
        malformed=args.malformed,
        seed=args.seed,
    )

    print(f"Done! Wrote {total_lines:,} lines to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
