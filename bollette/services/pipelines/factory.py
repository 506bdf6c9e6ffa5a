from bollette.services.llm.base import BaseLLMClient
from bollette.services.pipelines.base import BaseBillPipeline
from bollette.services.pipelines.llm import LLM_STRATEGY, LlmBillPipeline
from bollette.services.pipelines.rules import RULES_STRATEGY, RuleBillPipeline

STRATEGIES = (RULES_STRATEGY, LLM_STRATEGY)


def build_pipeline(strategy: str = RULES_STRATEGY, *, llm_client: BaseLLMClient | None = None) -> BaseBillPipeline:
    """Select the pattern-based or the model-based strategy."""

    key = (strategy or RULES_STRATEGY).strip().lower()
    if key == RULES_STRATEGY:
        return RuleBillPipeline()
    if key == LLM_STRATEGY:
        if llm_client is None:
            raise LookupError("LLM strategy requested but no LLM client is configured")
        return LlmBillPipeline(llm_client)
    raise ValueError(f"Unknown extraction strategy: {strategy}")
