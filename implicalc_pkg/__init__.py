"""implicalc package: expression splitting and function-name autocomplete."""

__all__ = [
    "config",
    "classifier",
    "splitter",
    "completion",
    "hints",
    "autocomplete",
    "evaluator",
    "cli",
    "types",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "split_function",
    "process_func_str",
    "get_last_term",
    "generate_hint",
    "build_completion_table",
    "AutoComplete",
    "Movement",
    "Hint",
    "SplitPolicy",
]
