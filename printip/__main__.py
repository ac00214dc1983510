"""
Demonstration run printing one value of each category.

Usage:
    python -m printip
"""

from collections import deque

from .fixed import Int8, Int16, Int32, Int64
from .render import render


def main():
    """Print the sample values, one line each."""
    render(Int8(-1))
    render(Int16(0))
    render(Int32(2130706433))
    render(Int64(8875824491850138409))
    render("Hello, World!")
    render([100, 200, 300, 400])
    render(deque([400, 300, 200, 100]))
    render((123, 456, 789, 0))


if __name__ == "__main__":
    main()
