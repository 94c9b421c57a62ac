from __future__ import annotations


class AIPipelineError(Exception):
    pass


class ModelCallError(AIPipelineError):
    pass


class LenientJSONError(AIPipelineError):
    pass


class GeneratedQuestionsInvalidError(AIPipelineError):
    pass
