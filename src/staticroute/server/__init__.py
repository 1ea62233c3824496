"""Request handling and server bootstrap."""
