"""vendify core library package."""
