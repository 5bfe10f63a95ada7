"""Click subcommands of the phraseset CLI."""
