"""Demo route used by the shell's populate option and ``bus-route demo``."""

# (name, passengers waiting, km to next stop, minutes to next stop)
SAMPLE_STOPS = [
    ("Central Station", 12, 2.5, 6.0),
    ("Market Road", 5, 1.2, 3.0),
    ("Library", 3, 0.9, 2.0),
    ("College", 8, 1.8, 4.0),
    ("Park", 2, 2.0, 5.0),
]
