import secrets
import string


def new_chunk_type() -> str:
    '''Generate a random chunk type to hide a message into.

    The first two letters are lowercase and the last two uppercase, i.e. the
    chunk is ancillary, private, with the reserved bit valid and unsafe to copy,
    so that the result is always accepted by ChunkType.from_str() and is_valid().
    '''
    lower = ''.join(secrets.choice(string.ascii_lowercase) for _ in range(2))
    upper = ''.join(secrets.choice(string.ascii_uppercase) for _ in range(2))

    return lower + upper
