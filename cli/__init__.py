"""PromptIDE terminal workspace"""
