# ==============================================================================
# APK SPRITE HARVESTER - COMMAND LINE INTERFACE
# ==============================================================================
# Extracts every given APK container into Extracted/<name>/ next to the
# input file, then repacks each extracted folder into RePacked/<name>.pak.
#
# Usage:
#   python -m apkharvest.cli monsters.apk items.apk
#   python -m apkharvest.cli monsters.apk --no-repack
#   python -m apkharvest.cli monsters.apk --repack-dir out/ --catalog
#   python -m apkharvest.cli --stats
# ==============================================================================

import sys
import argparse
from typing import List, Optional


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-supporting terminals)."""
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}\n")


def print_success(text: str):
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}✗ {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_warning(text: str):
    print(f"{Colors.YELLOW}⚠ {text}{Colors.END}")


# ==============================================================================
# HELPERS
# ==============================================================================
def load_config(args):
    """Build the run configuration from the config file and CLI overrides."""
    from apkharvest.core.config import Config

    config = Config(args.config) if args.config else Config()
    config.load()

    if args.debug:
        config.debug_mode = True
    if args.repack_dir:
        config.repack_dir = args.repack_dir
    if args.catalog:
        config.record_catalog = True

    return config


def get_database(config):
    """Open the catalog database named by the config."""
    from apkharvest.core.database import Database

    return Database(config.resolve_path(config.database_path))


# ==============================================================================
# COMMANDS
# ==============================================================================
def cmd_run(args) -> int:
    """Extract all inputs, then repack unless disabled."""
    from apkharvest.core.pipeline import process_inputs

    config = load_config(args)
    database = get_database(config) if config.record_catalog else None
    repack = False if args.no_repack else config.convert_to_pak

    print_header("Extracting Sprite Containers")

    summary = process_inputs(args.paths, config, repack=repack, database=database)

    print()
    for path, result in summary['extracted']:
        line = f"{path}: {result.extracted_count}/{result.total_sprites} sprites"
        if result.skipped:
            print_warning(f"{line} ({len(result.skipped)} skipped)")
        else:
            print_success(line)

    for path, reason in summary['failed']:
        print_error(f"{path}: {reason}")

    for pak_path in summary['repacked']:
        print_info(f"Repacked: {pak_path}")

    return 1 if summary['failed'] and not summary['extracted'] else 0


def cmd_stats(args) -> int:
    """Show catalog statistics."""
    print_header("Extraction Catalog")

    config = load_config(args)
    db = get_database(config)
    stats = db.get_stats()

    print(f"Containers:     {stats['containers']}")
    print(f"Sprites:        {stats['sprites']}")
    print(f"Skipped:        {stats['skipped']}")
    print(f"Frames:         {stats['frames']}")
    print(f"Image data:     {stats['image_bytes'] / (1024 * 1024):.2f} MB")

    containers = db.get_all_containers()
    if containers:
        print(f"\n{'Name':<30} {'Sprites':<10} {'Skipped':<10}")
        print("-" * 50)
        for container in containers:
            print(f"{container.name:<30} {container.extracted_count:<10} {container.skipped_count:<10}")

    return 0


# ==============================================================================
# MAIN ARGUMENT PARSER
# ==============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apkharvest",
        description="Extract sprites from APK containers and repack them as PAK",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s monsters.apk                 Extract, then repack into RePacked/
  %(prog)s *.apk --no-repack            Extract only
  %(prog)s monsters.apk --catalog       Also record the run in the catalog
  %(prog)s --stats                      Show catalog statistics
        """
    )

    parser.add_argument('paths', nargs='*', help='APK container file(s) to extract')
    parser.add_argument('--no-repack', action='store_true',
                        help='Skip repacking extracted folders into .pak files')
    parser.add_argument('--repack-dir', help='Output folder for .pak files')
    parser.add_argument('--catalog', action='store_true',
                        help='Record extractions in the SQLite catalog')
    parser.add_argument('--stats', action='store_true',
                        help='Show catalog statistics and exit')
    parser.add_argument('--config', help='Path to a config.json file')
    parser.add_argument('--debug', action='store_true',
                        help='Print resolved frame table offsets')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    if sys.platform == 'win32':
        # Enable ANSI colors on Windows
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
        except (AttributeError, OSError):
            Colors.disable()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.stats:
        return cmd_stats(args)

    if not args.paths:
        parser.print_help()
        return 1

    return cmd_run(args)


if __name__ == "__main__":
    sys.exit(main())
