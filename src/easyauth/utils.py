def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning up to the length of the shorter
    string every time and folding the length difference into the result.
    Running time still depends on that shorter length, so a timing attack
    can learn the length of the input; codes compared here are always six
    characters long.
    """
    diff = len(s1) ^ len(s2)
    for i in range(min(len(s1), len(s2))):
        diff |= ord(s1[i]) ^ ord(s2[i])
    return diff == 0
