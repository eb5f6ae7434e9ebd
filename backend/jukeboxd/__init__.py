"""Jukeboxd: post about songs, comment, and follow other listeners."""
