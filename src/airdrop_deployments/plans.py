"""Deployment sequences offered by the command line."""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .types import ArgKind, ArgSpec, DeploymentStep

# WorldIDAirdrop(worldIdRouter, groupId, actionId, token, holder, airdropAmount)
_AIRDROP_ARGS = (
    ArgSpec.config("groupId"),
    ArgSpec.config("actionId"),
    ArgSpec.config("erc20Address"),
    ArgSpec.config("holderAddress"),
    ArgSpec.config("airdropAmount"),
)

ROUTER_MOCK_STEP = DeploymentStep(name="worldIDRouterMock", artifact="WorldIDIdentityManagerRouterMock")


@dataclass(frozen=True)
class DeploymentPlan:
    """A named sequence of deployment steps."""

    name: str
    description: str
    steps: Tuple[DeploymentStep, ...]

    @property
    def config_keys(self) -> List[str]:
        """Configuration keys read by any step's constructor arguments."""
        keys: List[str] = []
        for step in self.steps:
            for arg in step.args:
                if arg.kind == ArgKind.CONFIG and arg.value not in keys:
                    keys.append(arg.value)
        return keys

    @property
    def uses_router_mock(self) -> bool:
        return any(step.name == ROUTER_MOCK_STEP.name for step in self.steps)


PLANS: Dict[str, DeploymentPlan] = {
    plan.name: plan
    for plan in [
        DeploymentPlan(
            name="deploy-airdrop",
            description="Interactively deploys the WorldIDAirdrop contract.",
            steps=(
                DeploymentStep(
                    name="worldIDAirdrop",
                    artifact="WorldIDAirdrop",
                    args=(ArgSpec.config("worldIDRouterAddress"),) + _AIRDROP_ARGS,
                ),
            ),
        ),
        DeploymentPlan(
            name="deploy-multi-airdrop",
            description="Interactively deploys the WorldIDMultiAirdrop contract.",
            steps=(
                DeploymentStep(
                    name="worldIDMultiAirdrop",
                    artifact="WorldIDMultiAirdrop",
                    args=(ArgSpec.config("worldIDRouterAddress"),),
                ),
            ),
        ),
        DeploymentPlan(
            name="mock-airdrop",
            description=(
                "Interactively deploys WorldIDIdentityManagerRouterMock alongside "
                "WorldIDAirdrop for testing."
            ),
            steps=(
                ROUTER_MOCK_STEP,
                DeploymentStep(
                    name="mockWorldIDAirdrop",
                    artifact="WorldIDAirdrop",
                    args=(ArgSpec.step(ROUTER_MOCK_STEP.name),) + _AIRDROP_ARGS,
                ),
            ),
        ),
        DeploymentPlan(
            name="mock-multi-airdrop",
            description=(
                "Interactively deploys WorldIDIdentityManagerRouterMock alongside "
                "WorldIDMultiAirdrop for testing."
            ),
            steps=(
                ROUTER_MOCK_STEP,
                DeploymentStep(
                    name="mockWorldIDMultiAirdrop",
                    artifact="WorldIDMultiAirdrop",
                    args=(ArgSpec.step(ROUTER_MOCK_STEP.name),),
                ),
            ),
        ),
    ]
}

# Steps whose address set-allowance offers as the default spender
AIRDROP_STEPS = ["worldIDAirdrop", "worldIDMultiAirdrop", "mockWorldIDAirdrop", "mockWorldIDMultiAirdrop"]
