#!/usr/bin/env python3
"""
Numeric Entry - Sample Application
Entry Point Module
Handles dependency checking, argument parsing and startup of the sample
window.
"""
import argparse
import sys
import time
import traceback
from pathlib import Path
from typing import Optional, List


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Numeric Entry - numeric text box sample application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python .                     # Start the sample window
  python . --check-deps        # Check dependencies only
  python . --debug             # Start with debug logging on the console
  python . --log-dir ./logs    # Custom log directory
        """
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version="Numeric Entry 1.0.0"
    )
    parser.add_argument(
        "--check-deps", "-c",
        action="store_true",
        help="Check dependencies and exit"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force start even if dependencies are missing"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Custom directory for log files"
    )
    return parser.parse_args(argv)


def check_dependencies() -> bool:
    """Check if required dependencies are available."""
    required_packages = {
        'PySide6': ('PySide6', 'GUI framework'),
    }
    missing_required = []
    print(f"Python version: {sys.version}")
    print(f"Python executable: {sys.executable}\n")
    for display_name, (import_name, description) in required_packages.items():
        try:
            module = __import__(import_name)
            if import_name == 'PySide6':
                from PySide6 import QtCore, QtWidgets, QtGui
            print(f"OK {display_name}: {description} (version: {getattr(module, '__version__', 'unknown')})")
        except ImportError as e:
            missing_required.append(f"{display_name} ({description})")
            print(f"ERROR {display_name}: {description} - MISSING")
            print(f"   Import error: {e}")
    if missing_required:
        print("\nMissing required dependencies:")
        for package in missing_required:
            print(f"   - {package}")
        print("\nTry installing with:")
        print(f"   {sys.executable} -m pip install " + " ".join(p.split()[0] for p in missing_required))
        return False
    return True


def setup_environment():
    """Make the project modules importable when run as ``python .``."""
    current_dir = Path(__file__).parent
    if str(current_dir) not in sys.path:
        sys.path.insert(0, str(current_dir))


def configure_logging(args: argparse.Namespace):
    """Route logs to the requested directory and level."""
    from logger import setup_logger
    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = setup_logger("numeric_entry", log_dir)
    if args.debug:
        logger.set_console_level("DEBUG")
        print("Debug logging enabled\n")
    return logger


def main():
    """Main entry point for the sample application."""
    args = None
    try:
        args = parse_arguments()
        print("\n" + "="*60)
        print("Numeric Entry - Sample Application")
        print("="*60 + "\n")
        setup_environment()
        print("Checking dependencies...")
        deps_ok = check_dependencies()
        if args.check_deps:
            if deps_ok:
                print("\nAll dependencies are satisfied!")
                return 0
            print("\nSome dependencies are missing!")
            return 1
        if not args.force and not deps_ok:
            print("\nCannot start application due to missing dependencies.")
            print("Use --force to attempt startup anyway, or install missing packages.")
            return 1
        if not deps_ok:
            print("\nStarting with missing dependencies (--force specified)\n")
        configure_logging(args)
        from main import run_application
        return run_application()
    except KeyboardInterrupt:
        print("\n\nApplication interrupted by user")
        return 130
    except Exception as e:
        print("\nCritical error starting Numeric Entry:")
        print(f"   {type(e).__name__}: {e}")
        if args is not None and args.debug:
            print("\nDebug traceback:")
            traceback.print_exc()
        else:
            print("\nRun with --debug for detailed error information")
        return 1


if __name__ == "__main__":
    start_time = time.time()
    exit_code = main()
    print(f"\nNumeric Entry ran for {time.time() - start_time:.2f} seconds")
    sys.exit(exit_code)
