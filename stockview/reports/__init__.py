"""Report builders for exported workbooks."""
