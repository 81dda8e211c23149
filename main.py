# main.py
import os, sys

def main():
    if os.geteuid() != 0:
        print("Please run this script as root or with sudo", file=sys.stderr)
        sys.exit(1)
    if not sys.stdout.isatty():
        from provision import run_unattended
        sys.exit(run_unattended())
    from app import StaticIPApp
    from logger import silence_console, restore_console
    from report import build_summary
    app = StaticIPApp()
    silence_console()
    try:
        app.run()
    finally:
        restore_console()
    if app.report is not None:
        print(build_summary(app.report))
    sys.exit(app.return_code or 0)

if __name__ == "__main__":
    main()
