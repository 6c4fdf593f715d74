# flake8: noqa

from .generate import evenly_spaced_table, random_table, solve_expected
