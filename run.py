import sys
import argparse
import os

# Add project root to python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))


def run_bot():
    from twoam.main import run_bot
    run_bot()


def init_db():
    from twoam.main import init_db
    init_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run 2amInDiscord components")
    parser.add_argument('component', choices=['bot', 'init-db'], help="Component to run")

    args = parser.parse_args()

    if args.component == 'bot':
        run_bot()
    elif args.component == 'init-db':
        init_db()
