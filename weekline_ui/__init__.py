"""Week-relative flow chart layout for Weekline."""
