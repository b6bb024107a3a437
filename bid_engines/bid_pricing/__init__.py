"""Bid Pricing module - manual line-item bids, totals and margin."""
