"""Birthday listing constants."""

NOT_READY_MESSAGE = "Birthday listing is not ready yet, try again in a moment."
GUILD_ONLY_MESSAGE = "This command can only be used in a server."
MODERATOR_ONLY_MESSAGE = ":x: Only bot moderators may use this command."
INTERNAL_ERROR_MESSAGE = ":x: An internal error occurred. Try again later."

EXPORT_DONE_MESSAGE = "Exported {count} birthdays to file."
