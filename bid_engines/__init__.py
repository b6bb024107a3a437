"""Measurement-to-estimate pricing engines for site contracting bids."""
