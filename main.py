# ==============================================================================
# APK SPRITE HARVESTER - MAIN ENTRY POINT
# ==============================================================================
# Entry point for running from source or as a PyInstaller executable.
#
# Usage:
#   python main.py monsters.apk items.apk   # Extract + repack
#   python main.py --version                # Show version
#   python main.py --check                  # Check dependencies
#   python main.py --paths                  # Show data paths
#
# When built as exe, input files can be dropped onto APKSpriteHarvester.exe.
# ==============================================================================

import os
import sys
import traceback

# ==============================================================================
# FROZEN EXE DETECTION
# ==============================================================================
IS_FROZEN = getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')

if IS_FROZEN:
    BASE_PATH = sys._MEIPASS
    APP_PATH = os.path.dirname(sys.executable)
else:
    BASE_PATH = os.path.dirname(os.path.abspath(__file__))
    APP_PATH = BASE_PATH

VERSION = "1.0.0"


# ==============================================================================
# BANNER
# ==============================================================================

def print_banner():
    """Print the application banner."""
    banner = f"""
    ╔═══════════════════════════════════════════════════════════════╗
    ║                                                               ║
    ║               A P K   S P R I T E   H A R V E S T E R         ║
    ║                                                               ║
    ║        APK sprite extraction & PAK repacking  v{VERSION}          ║
    ║                                                               ║
    ╚═══════════════════════════════════════════════════════════════╝
    """
    print(banner)


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

def check_dependencies():
    """
    Check if required dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    for dep in ['sqlalchemy']:
        try:
            __import__(dep)
        except ImportError:
            missing.append(dep)

    return (len(missing) == 0, missing)


# ==============================================================================
# MODE LAUNCHERS
# ==============================================================================

def run_cli(argv):
    """
    Run the command-line interface.

    Returns:
        Exit code (0 for success)
    """
    try:
        from apkharvest.cli import main as cli_main
        return cli_main(argv)
    except Exception as e:
        print(f"[ERROR] CLI failed: {e}")
        traceback.print_exc()
        return 1


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main():
    """Handle launcher flags, then hand everything else to the CLI."""
    argv = sys.argv[1:]

    if '--version' in argv:
        print(f"APK Sprite Harvester v{VERSION}")
        return 0

    if '--paths' in argv:
        from apkharvest.core.config import Config
        config = Config()
        config.load()
        print("APK Sprite Harvester Paths:")
        print(f"  Frozen:         {IS_FROZEN}")
        print(f"  Base Path:      {BASE_PATH}")
        print(f"  App Path:       {APP_PATH}")
        print(f"  Config:         {config.config_path}")
        print(f"  Database:       {config.resolve_path(config.database_path)}")
        print(f"  Repack Dir:     {config.resolve_path(config.repack_dir)}")
        print(f"  Working Dir:    {os.getcwd()}")
        return 0

    if '--check' in argv:
        print("Checking dependencies...")
        print(f"  Frozen: {IS_FROZEN}")
        print(f"  Python: {sys.version}")

        all_ok, missing = check_dependencies()
        if all_ok:
            print("[OK] All core dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")
        return 0 if all_ok else 1

    all_ok, missing = check_dependencies()
    if not all_ok:
        print(f"[ERROR] Missing required packages: {', '.join(missing)}")
        return 1

    print_banner()
    return run_cli(argv)


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    try:
        exit_code = main()
    except Exception as e:
        print(f"\n[FATAL ERROR] {e}")
        traceback.print_exc()
        if IS_FROZEN:
            input("\nPress Enter to exit...")
        exit_code = 1
    sys.exit(exit_code)
