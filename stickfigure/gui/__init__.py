"""Interactive Dear PyGui front end for posing the stick figure."""
