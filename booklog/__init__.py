"""
Booklog: a personal library catalog of authors, books, series and readings.
"""
