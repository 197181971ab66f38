"""
Pydantic schemas for API request and response validation.

Wire names follow the widget's camelCase where it already uses them
(userInput, maxTokens, topP, adapterUsed); everything else is snake_case.
"""
