"""
UOM conversion and yield engine.

Pure Python math. No I/O, no database.
Given a quantity in any selling unit and the piece dimensions, produce board
feet (and back), plus yield, waste and tally allocation figures.
"""
