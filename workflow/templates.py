"""Placeholder substitution for example backend commands."""

# Substituted in this order, first occurrence only
PLACEHOLDERS = ("{clientId}", "{secret}", "{ownerId}")


def resolve_backend_command(template: str, client_id: str, secret: str, owner_id: str) -> str:
    """Fill the placeholders of an example backend command.

    Only the first occurrence of each placeholder is replaced; placeholders
    that are not present are ignored.

    Args:
        template: Command with ``{clientId}``, ``{secret}``, ``{ownerId}``
        client_id: Id of the loaded extension manifest
        secret: Extension secret
        owner_id: Id of the user creating the project

    Returns:
        The resolved command
    """
    for placeholder, value in zip(PLACEHOLDERS, (client_id, secret, owner_id)):
        template = template.replace(placeholder, value, 1)
    return template
