# Scripts package init
"""
Movie API Backend — Operational Scripts
=========================================

What:  Command-line tools run outside the web server (database seeding).
"""
