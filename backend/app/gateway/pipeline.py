"""Policy pipeline - applies gateway policies to a routed request."""

from collections.abc import Sequence

from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import get_logger
from app.gateway.policy import DirectResponse, PassThrough, Policy, PolicyFilterError

logger = get_logger("gateway.pipeline")


class PolicyPipeline:
    """Runs policies in order until one produces a direct response.

    - DirectResponse: stop and return the response to the client
    - PassThrough: continue with the next policy
    - PolicyFilterError: log and re-raise to the caller
    """

    def __init__(self, policies: Sequence[Policy]) -> None:
        self.policies = tuple(policies)

    def run(self, request: Request) -> Response | None:
        """Apply the policies to a request.

        Returns the short-circuit response, or None if every policy passed
        the request through.
        """
        for policy in self.policies:
            try:
                outcome = policy.apply(request)
            except PolicyFilterError as e:
                logger.error(
                    "policy_failed",
                    policy=policy.name,
                    path=request.scope.get("path"),
                    error=str(e),
                )
                raise

            if isinstance(outcome, DirectResponse):
                logger.debug("policy_direct_response", policy=policy.name)
                return outcome.response
            if isinstance(outcome, PassThrough):
                logger.debug("policy_pass_through", policy=policy.name)
                continue

            msg = f"Policy {policy.name} returned unsupported outcome {outcome!r}"
            raise TypeError(msg)

        return None
