"""HTTP gateway concerns shared by every route."""
