#!/usr/bin/env python3
"""Thin entrypoint for the terminal HTTP request composer."""

from __future__ import annotations

from post_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
