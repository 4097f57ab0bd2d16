"""Shared test fixtures."""

from __future__ import annotations

import pytest

from svgflat.svg.parser import parse_svg

SVG_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 100 100">'

# Real-world icon path data (lucide "home" and "settings")
HOME_D = (
    "M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9"
    "a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"
)

SETTINGS_D = (
    "M12.22 2h-.44a2 2 0 0 0-2 2v.18a2 2 0 0 1-1 1.73l-.43.25a2 2 0 0 1-2 0l-.15-.08"
    "a2 2 0 0 0-2.73.73l-.22.38a2 2 0 0 0 .73 2.73l.15.1a2 2 0 0 1 1 1.72v.51a2 2 0 0 1-1 1.74"
    "l-.15.09a2 2 0 0 0-.73 2.73l.22.38a2 2 0 0 0 2.73.73l.15-.08a2 2 0 0 1 2 0l.43.25"
    "a2 2 0 0 1 1 1.73V20a2 2 0 0 0 2 2h.44a2 2 0 0 0 2-2v-.18a2 2 0 0 1 1-1.73l.43-.25"
    "a2 2 0 0 1 2 0l.15.08a2 2 0 0 0 2.73-.73l.22-.39a2 2 0 0 0-.73-2.73l-.15-.08"
    "a2 2 0 0 1-1-1.74v-.5a2 2 0 0 1 1-1.74l.15-.09a2 2 0 0 0 .73-2.73l-.22-.38"
    "a2 2 0 0 0-2.73-.73l-.15.08a2 2 0 0 1-2 0l-.43-.25a2 2 0 0 1-1-1.73V4a2 2 0 0 0-2-2z"
)

SMILEY_SVG = f'''{SVG_OPEN}
  <circle cx="12" cy="12" r="10" transform="translate(10 5)"/>
  <circle cx="8" cy="9" r="1" transform="rotate(90)"/>
  <circle cx="16" cy="9" r="1"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2" transform="rotate(45 12 12)"/>
</svg>'''

# Every supported element kind, nested groups and a <use>
COMPOSITE_SVG = f'''{SVG_OPEN}
  <defs>
    <path id="tick" d="M0 0h4v4H0z" transform="scale(0.5)"/>
  </defs>
  <title>composite</title>
  <g transform="translate(10, 10)">
    <circle id="c1" cx="5" cy="5" r="2" transform="rotate(30)"/>
    <rect x="0" y="0" width="20" height="10" rx="2"/>
    <g transform="rotate(15 5 5)">
      <ellipse cx="10" cy="10" rx="4" ry="2" transform="scale(2 1)"/>
      <path d="{HOME_D}" transform="translate(1 1)"/>
    </g>
    <use href="#tick" x="30" y="30" transform="rotate(-20)"/>
  </g>
  <mask id="m" transform="scale(1.5)">
    <rect x="1" y="1" width="3" height="3"/>
  </mask>
  <path d="{SETTINGS_D}" transform="translate(50 50) rotate(33 12 12) scale(1.25)"/>
</svg>'''

UNSUPPORTED_SVG = f'''{SVG_OPEN}
  <circle cx="5" cy="5" r="1" transform="translate(1 1)"/>
  <text x="1" y="1" transform="translate(3 3)">label</text>
  <line x1="0" y1="0" x2="1" y2="1" transform="rotate(10)"/>
</svg>'''


@pytest.fixture
def smiley_root():
    return parse_svg(SMILEY_SVG)


@pytest.fixture
def composite_root():
    return parse_svg(COMPOSITE_SVG)


def svg_with(body: str) -> str:
    """Wrap element markup in an <svg> root."""
    return f"{SVG_OPEN}{body}</svg>"
