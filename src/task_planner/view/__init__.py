"""Filter/sort/render pipeline over the task collection."""
