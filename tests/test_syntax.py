from chunkpy.syntax import (
    ChunkFlags,
    ChunkKind,
    LanguageMask,
    PatternClass,
    copy_relevant_flags,
    flag_names,
    is_first_var_def,
    is_one_class,
    language_from_filename,
    pattern_class,
)


def test_copy_relevant_flags_keeps_context_bits_only() -> None:
    flags = (
        ChunkFlags.IN_PREPROC
        | ChunkFlags.IN_SPAREN
        | ChunkFlags.IN_NAMESPACE
        | ChunkFlags.STMT_START
        | ChunkFlags.EXPR_START
        | ChunkFlags.VAR_DEF
    )

    copied = copy_relevant_flags(flags)

    assert copied == ChunkFlags.IN_PREPROC | ChunkFlags.IN_SPAREN | ChunkFlags.IN_NAMESPACE


def test_composite_flag_helpers_need_every_bit() -> None:
    assert is_first_var_def(ChunkFlags.VAR_DEF | ChunkFlags.VAR_1ST)
    assert not is_first_var_def(ChunkFlags.VAR_DEF)
    assert is_one_class(ChunkFlags.ONE_LINER | ChunkFlags.IN_CLASS)
    assert not is_one_class(ChunkFlags.ONE_LINER)


def test_flag_names_lists_single_bits_lowest_first() -> None:
    assert flag_names(ChunkFlags.NONE) == []
    assert flag_names(ChunkFlags.EXPR_START | ChunkFlags.STMT_START) == ["STMT_START", "EXPR_START"]


def test_pattern_classes_of_complex_statements() -> None:
    assert pattern_class(ChunkKind.IF) == PatternClass.PBRACED
    assert pattern_class(ChunkKind.FOR) == PatternClass.PBRACED
    assert pattern_class(ChunkKind.DO) == PatternClass.BRACED
    assert pattern_class(ChunkKind.TRY) == PatternClass.BRACED
    assert pattern_class(ChunkKind.CATCH) == PatternClass.OPBRACED
    assert pattern_class(ChunkKind.NAMESPACE) == PatternClass.VBRACED
    assert pattern_class(ChunkKind.WHILE_OF_DO) == PatternClass.PAREN
    assert pattern_class(ChunkKind.ELSE) == PatternClass.ELSE
    assert pattern_class(ChunkKind.WORD) == PatternClass.NONE


def test_open_close_pairs() -> None:
    assert ChunkKind.SPAREN_OPEN.closing == ChunkKind.SPAREN_CLOSE
    assert ChunkKind.VBRACE_OPEN.closing == ChunkKind.VBRACE_CLOSE
    assert ChunkKind.WORD.closing is None
    assert ChunkKind.VBRACE_CLOSE.is_virtual
    assert ChunkKind.VBRACE_OPEN.opens_brace_level
    assert not ChunkKind.PAREN_OPEN.opens_brace_level


def test_language_mask_preproc_bit_gates_matching() -> None:
    tag = LanguageMask.ALL | LanguageMask.PP

    assert tag.dialects == LanguageMask.ALL
    assert not tag.applies_to(LanguageMask.C)
    assert tag.applies_to(LanguageMask.C, in_preproc=True)
    assert LanguageMask.CPP.applies_to(LanguageMask.CPP)
    assert not LanguageMask.JAVA.applies_to(LanguageMask.CPP)


def test_language_from_filename() -> None:
    assert language_from_filename("main.c") == LanguageMask.C
    assert language_from_filename("include/foo.h") == LanguageMask.CPP
    assert language_from_filename("src/Foo.JAVA") == LanguageMask.JAVA
    assert language_from_filename("x.cs") == LanguageMask.CS
    assert language_from_filename("x.d") == LanguageMask.D
    assert language_from_filename("x.m") == LanguageMask.OC
    assert language_from_filename("script.pawn") == LanguageMask.PAWN
    assert language_from_filename("README") == LanguageMask.CPP
    assert language_from_filename("README", default=LanguageMask.C) == LanguageMask.C
