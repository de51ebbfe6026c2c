"""Serve the pricing API from a source checkout."""
import argparse
import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))


def main():
    parser = argparse.ArgumentParser(description="Run the pricing calculator API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="restart on source changes")
    args = parser.parse_args()

    uvicorn.run("pricing_calculator.api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
