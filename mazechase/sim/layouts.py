from __future__ import annotations

# '#' wall, '.' pill, 'o' power pill, 'P' evader start, 'G' pursuer start
CLASSIC_LAYOUT = """\
###############
#o....#.#....o#
#.###.#.#.###.#
#.............#
#.###.###.###.#
#.....#G#.....#
###.#.#.#.#.###
#...#.....#...#
#.#.###.###.#.#
#......P......#
#.###.#.#.###.#
#o....#.#....o#
###############
"""
