"""Session aggregation, trends, series and presentation reports."""
