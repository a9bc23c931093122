# ==============================================================================
# APK SPRITE HARVESTER - BUILD SCRIPT
# ==============================================================================
# Builds a standalone console executable with PyInstaller.
#
# Usage:
#   python build.py              # Directory build (dist/APKSpriteHarvester/)
#   python build.py --onefile    # Single exe
#   python build.py --clean      # Clean build directories first
#   python build.py --zip        # Zip the directory build
#
# Requirements:
#   pip install ".[build]"
# ==============================================================================

import os
import sys
import shutil
import subprocess
import argparse
from datetime import datetime


# ==============================================================================
# CONFIGURATION
# ==============================================================================

APP_NAME = "APKSpriteHarvester"
VERSION = "1.0.0"

CLEAN_DIRS = ['build', 'dist']

HIDDEN_IMPORTS = [
    'sqlalchemy.dialects.sqlite',
    'apkharvest.core.database',
    'apkharvest.core.pipeline',
    'apkharvest.extractors.apk_extractor',
    'apkharvest.extractors.pak_extractor',
    'apkharvest.extractors.pak_writer',
]

EXCLUDES = ['tkinter', 'PyQt6', 'PIL', 'numpy', 'IPython']


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================

def print_header(text: str):
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60 + "\n")


def clean_build():
    """Remove build artifacts and __pycache__ folders."""
    print_header("Cleaning Build Directories")

    for dir_name in CLEAN_DIRS:
        if os.path.exists(dir_name):
            print(f"[INFO] Removing {dir_name}/")
            shutil.rmtree(dir_name, ignore_errors=True)

    for root, dirs, _ in os.walk('.'):
        for d in dirs:
            if d == '__pycache__':
                shutil.rmtree(os.path.join(root, d), ignore_errors=True)

    print("[OK] Clean complete")


def check_dependencies() -> bool:
    print_header("Checking Dependencies")

    try:
        import PyInstaller
        print(f"[OK] PyInstaller {PyInstaller.__version__} found")
    except ImportError:
        print("[ERROR] PyInstaller not found!")
        print("[INFO] Install with: pip install pyinstaller")
        return False

    try:
        import sqlalchemy
        print(f"[OK] SQLAlchemy {sqlalchemy.__version__} found")
    except ImportError:
        print("[ERROR] SQLAlchemy not found!")
        return False

    return True


def run_pyinstaller(onefile: bool = False) -> bool:
    print_header("Building Executable")

    cmd = [
        sys.executable, '-m', 'PyInstaller',
        '--name', APP_NAME,
        '--clean',
        '--noconfirm',
        '--console',
        '--onefile' if onefile else '--onedir',
    ]

    for imp in HIDDEN_IMPORTS:
        cmd.extend(['--hidden-import', imp])
    for exc in EXCLUDES:
        cmd.extend(['--exclude-module', exc])

    cmd.append('main.py')

    print(f"[INFO] Running: {' '.join(cmd[:8])}...")
    result = subprocess.run(cmd)

    if result.returncode != 0:
        print("[ERROR] PyInstaller failed!")
        return False

    print("[OK] Build complete!")
    return True


def create_zip_package() -> bool:
    print_header("Creating Distribution Package")

    dist_dir = os.path.join('dist', APP_NAME)
    if not os.path.exists(dist_dir):
        print("[ERROR] Distribution directory not found. Run build first.")
        return False

    zip_name = f"{APP_NAME}-{VERSION}-{datetime.now().strftime('%Y%m%d')}"
    shutil.make_archive(os.path.join('dist', zip_name), 'zip', 'dist', APP_NAME)
    print(f"[OK] Package created: dist/{zip_name}.zip")
    return True


# ==============================================================================
# MAIN
# ==============================================================================

def main():
    parser = argparse.ArgumentParser(description=f"Build {APP_NAME} executable")
    parser.add_argument('--onefile', action='store_true',
                        help='Create single executable (slower startup)')
    parser.add_argument('--clean', action='store_true',
                        help='Clean build directories first')
    parser.add_argument('--zip', action='store_true',
                        help='Create ZIP package after build')
    args = parser.parse_args()

    print_header(f"Building {APP_NAME} v{VERSION}")

    if args.clean:
        clean_build()

    if not check_dependencies():
        return 1

    if not run_pyinstaller(args.onefile):
        return 1

    if args.zip and not args.onefile:
        create_zip_package()

    return 0


if __name__ == '__main__':
    sys.exit(main())
