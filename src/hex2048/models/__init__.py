"""Value types: hexes, the grid, pixel layout and actions."""
