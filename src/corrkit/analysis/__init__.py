"""
corrkit.analysis — Exploratory analysis tools
=============================================

Modules
-------
correlation : correlation data frames (correlate, shave, rearrange, focus, stretch, fashion)
"""
