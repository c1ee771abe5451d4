"""
Configuration constants shared by the matchers, the constraint engine and
the debug printers
"""

# dims_involved value of a ConstraintsList that no access could populate
EMPTY_DIMS = -1

# Debug rendering
INDENT = "  "
MATCHER_DELIMITER = "@@@@@@"
READ_MATCHER_TITLE = "Read matcher"
WRITE_MATCHER_TITLE = "Write matcher"
READ_AND_WRITE_MATCHER_TITLE = "Read & Write matcher"
EMPTY_CONSTRAINTS_TEXT = "empty"
