"""The ``rimpub`` command-line front-end."""
