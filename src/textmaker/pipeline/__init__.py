from .runner import assert_pair_brackets, create_chunks_from_input, create_text_from_inputs

__all__ = ["assert_pair_brackets", "create_chunks_from_input", "create_text_from_inputs"]
