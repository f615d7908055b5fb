#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0


class SmithyCodegenError(Exception):
    """Base exception type for all exceptions raised while generating code."""


class ModelError(SmithyCodegenError):
    """Exception indicating the model violates an HTTP binding constraint.

    These are normally caught by model validation before code generation starts.
    """


class ExpectationNotMetError(SmithyCodegenError):
    """Exception type for exceptions thrown by unmet internal assertions.

    This indicates a defect in the generator or in binding extraction rather than
    a problem with user input, so it is never caught by the generator itself.
    """
