"""Notion integration package.

Builds "create page" request bodies for a to-do database and sends them
to the Notion REST API.
"""
