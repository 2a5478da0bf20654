"""Convert CMS images in an already generated site to WebP <picture> elements.

Runs the same rewriter the Pelican plugin uses over every HTML file in the
output directory, for sites built without the plugin enabled or mirrored from
a live WordPress install.

Usage:
    python rewrite_output.py                            # rewrite output/ in place
    python rewrite_output.py --dry-run                  # report only
    python rewrite_output.py --output-dir public --quality 70 --basic
    python rewrite_output.py --metadata attachments.json
    python rewrite_output.py --media-endpoint https://example.com/wp-json/wp/v2/media

Exit codes:
    0 = success (even if nothing was converted)
    1 = output directory missing
    2 = attachment metadata could not be loaded
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from webp_pictures import PictureRewriter, RewriterConfig, RewriteStats, describe, sanitize_quality
from webp_pictures.metadata import JsonMetadataLookup, MetadataError, RestMetadataLookup


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rewrite <img> tags in generated HTML into WebP <picture> elements")
    parser.add_argument('--output-dir', default='output', help='Directory of generated HTML (default: output)')
    parser.add_argument('--quality', type=sanitize_quality, default=80, help='WebP quality sent to the CDN, 1-100 (default: 80)')
    parser.add_argument('--basic', action='store_true', help='Leave srcset attributes alone')
    parser.add_argument('--debug', action='store_true', help='Prepend an HTML comment to every converted image')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--metadata', type=Path, help='JSON export of attachment metadata keyed by attachment id')
    source.add_argument('--media-endpoint', help='WordPress REST media endpoint, e.g. https://example.com/wp-json/wp/v2/media')
    parser.add_argument('--dry-run', action='store_true', help='Report what would change without writing files')
    return parser


def rewrite_tree(output_dir: Path, rewriter: PictureRewriter, dry_run: bool = False) -> tuple[RewriteStats, int]:
    """Rewrite every HTML file under *output_dir*; returns totals and files changed."""
    totals = RewriteStats()
    changed = 0
    for html_file in sorted(output_dir.rglob('*.html')):
        rel_path = html_file.relative_to(output_dir)
        try:
            html = html_file.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            print(f"[WARN] Failed to read {rel_path}: {e}")
            continue

        rewritten, stats = rewriter.rewrite_with_stats(html)
        totals.images += stats.images
        totals.converted += stats.converted
        totals.skipped += stats.skipped
        totals.failed += stats.failed
        if rewritten == html:
            continue

        changed += 1
        print(f"[INFO] {rel_path}: {stats.converted} of {stats.images} images converted")
        if dry_run:
            continue
        try:
            html_file.write_text(rewritten, encoding='utf-8')
        except OSError as e:
            print(f"[WARN] Failed to write {rel_path}: {e}")
    return totals, changed


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    output_dir = Path(args.output_dir).resolve()
    if not output_dir.exists():
        print(f"[ERROR] Output directory not found: {output_dir}")
        print("Run 'pelican content' to generate the site first.")
        return 1

    lookup = None
    if args.metadata:
        try:
            lookup = JsonMetadataLookup(args.metadata)
        except MetadataError as e:
            print(f"[ERROR] {e}")
            return 2
        print(f"[INFO] Loaded metadata for {len(lookup)} attachments")
    elif args.media_endpoint:
        lookup = RestMetadataLookup(args.media_endpoint)

    config = RewriterConfig(enhanced=not args.basic, debug=args.debug, quality=args.quality)
    for label, value in describe(config):
        print(f"[INFO] {label}: {value}")

    totals, changed = rewrite_tree(output_dir, PictureRewriter(config, lookup), dry_run=args.dry_run)

    print("\n" + "=" * 70)
    print("SUMMARY:")
    print(f"  • HTML files changed: {changed}{' (dry run, nothing written)' if args.dry_run else ''}")
    print(f"  • Images seen: {totals.images}")
    print(f"  • Converted: {totals.converted}")
    print(f"  • Left unchanged: {totals.skipped}")
    if totals.failed:
        print(f"  • Failed (left unchanged): {totals.failed}")
    print("=" * 70)
    return 0


if __name__ == '__main__':
    sys.exit(main())
