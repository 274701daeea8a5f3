#!/usr/bin/env python
"""
Narrata backend launcher

Usage:
    python run.py                    # default (127.0.0.1:8000)
    python run.py -p 8080            # custom port
    python run.py --host 0.0.0.0     # listen on all interfaces
    python run.py --reload           # hot reload
    python run.py --check            # report configuration and exit
"""
import argparse
import shutil
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).parent

# Without these the matching endpoints answer 401/500 instead of working
REQUIRED_INTEGRATIONS = ("supabase_auth",)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Narrata backend launcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-p", "--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload (development)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--check", action="store_true", help="Report configuration and exit")
    return parser.parse_args()


def bootstrap_env_file():
    env_file = ROOT_DIR / ".env"
    env_example = ROOT_DIR / ".env.example"
    if env_file.exists():
        return
    if env_example.exists():
        shutil.copy(env_example, env_file)
        print(f"[env] created {env_file.name} from {env_example.name}")
    else:
        print("[env] no .env file, using environment and defaults")


def check_env() -> bool:
    """
    Prepare local directories and report which integrations are configured

    Returns False when a required integration has no credentials.
    """
    bootstrap_env_file()

    # Imported late so a freshly created .env is picked up
    from narrata.core.config import get_settings

    settings = get_settings()
    print(f"[env] {settings.app_name} ({settings.app_env})")
    print(f"[env] database: {settings.database_url.split('://', 1)[0]}")

    for directory in settings.local_dirs():
        if not directory.exists():
            directory.mkdir(parents=True)
            print(f"[dirs] created {directory}")

    ok = True
    for name, configured in settings.integration_status().items():
        state = "configured" if configured else "not configured"
        if not configured and name in REQUIRED_INTEGRATIONS:
            state += " (required)"
            ok = False
        print(f"[integrations] {name}: {state}")
    if not settings.integration_status()["feedback_relay"]:
        print(f"[integrations] feedback falls back to {settings.fallback_store_path}")
    return ok


def main():
    args = parse_args()

    ok = check_env()
    if args.check:
        sys.exit(0 if ok else 1)
    if not ok:
        print("[env] authenticated endpoints will reject every request until SUPABASE_JWT_SECRET is set")

    print(f"\nNarrata API on http://{args.host}:{args.port} (docs at /docs)")
    print(f"reload={'on' if args.reload else 'off'} workers={args.workers}\n")

    try:
        import uvicorn
    except ImportError:
        print("uvicorn is not installed, run: pip install 'uvicorn[standard]'")
        sys.exit(1)

    try:
        uvicorn.run(
            "narrata.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers if not args.reload else 1,
            log_level="info",
        )
    except KeyboardInterrupt:
        print("\nServer stopped")


if __name__ == "__main__":
    main()
