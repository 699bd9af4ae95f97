"""Sync Jira issues into an Obsidian vault as Markdown files and a kanban board."""
