"""
ssgamelist - ScreenScraper gamelist manager

Loads ScreenScraper and EmulationStation gamelist.xml files, filters games
by facet, exports to either schema and repairs clone/parent links from a
reference dat file.
"""

__version__ = "0.3.0"
