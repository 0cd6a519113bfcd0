"""Error taxonomy for one-shot generation.

    InvalidRequest         — missing or falsy request field; message is shown
                             to the caller verbatim (HTTP 400).
    UpstreamUnavailable    — the monster index could not be fetched at all.
    CandidateUnresolvable  — one monster detail failed; never leaves the
                             bestiary client, the candidate is just skipped.
    GenerationFailed       — anything that stops generation; generic message
                             only (HTTP 500), detail goes to the log.
"""


class OneShotError(RuntimeError):
    """Base class for every error raised by the generator."""


class InvalidRequest(OneShotError):
    pass


class UpstreamUnavailable(OneShotError):
    pass


class CandidateUnresolvable(OneShotError):
    pass


class GenerationFailed(OneShotError):
    pass
