"""Display package: element-tree rendering of the current wallpaper state."""
