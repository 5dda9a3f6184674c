#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import time

import pytest

from vc_args import parse_compile_args
from vc_compile_args import (
    CompilationMode,
    CompileArgsDraft,
    CompileEntry,
    DEFAULT_COMPILE_ARGS,
    GlobOutput,
    GlobOutputKind,
    VioTask,
)
from vc_cursor import ArgCursor
from vc_errors import MalformedNumberError, MissingArgumentError, ModeConflictError, UnknownOptionError
from vc_internal_error import InternalCompilerError
from vc_options import (
    MAX_INT,
    MIN_INT,
    OPTION_HANDLERS,
    add_compile,
    interpret_option,
    parse_int_literal,
    parse_task_list,
    parse_worker_count,
    scan_args,
    set_compilation_mode,
    split_task_list,
)


def scan(tokens, context):
    opts, extras = scan_args(tokens, context)
    return opts.freeze(), extras


# -------------------------
# Dispatch table
# -------------------------


def test_recognized_vocabulary_is_exact():
    assert set(OPTION_HANDLERS) == {
        "-opt", "-byte", "-image", "-verbose", "-o", "-quick",
        "-check-vio-tasks", "-schedule-vio-checking", "-schedule-vio2vo",
        "-vio2vo", "-outputstate", "-no-glob", "-noglob", "-dump-glob",
    }


def test_empty_scan_yields_defaults(quiet_context):
    opts, extras = scan([], quiet_context)

    assert opts == DEFAULT_COMPILE_ARGS
    assert extras == []


def test_plain_tokens_are_deferred_in_order(quiet_context):
    opts, extras = scan(["b.v", "-verbose", "a.v"], quiet_context)

    assert extras == ["b.v", "a.v"]
    assert opts.compile_list == ()
    assert opts.echo_all is True


def test_unknown_option_is_rejected_immediately(quiet_context):
    with pytest.raises(UnknownOptionError) as exc:
        scan(["a.v", "-bogus", "-o"], quiet_context)

    assert exc.value.option == "-bogus"


def test_lone_dash_is_an_unknown_option(quiet_context):
    with pytest.raises(UnknownOptionError):
        scan(["-"], quiet_context)


# -------------------------
# Fixed-arity options
# -------------------------


def test_output_name_last_write_wins(quiet_context):
    opts, _ = scan(["-o", "first.vo", "-o", "second.vo"], quiet_context)

    assert opts.output_name == "second.vo"


def test_output_name_takes_option_looking_argument(quiet_context):
    opts, _ = scan(["-o", "-weird"], quiet_context)

    assert opts.output_name == "-weird"


@pytest.mark.parametrize("option", ["-o", "-image", "-outputstate", "-dump-glob", "-vio2vo"])
def test_missing_argument_names_option(option, quiet_context):
    with pytest.raises(MissingArgumentError) as exc:
        scan([option], quiet_context)

    assert exc.value.option == option


@pytest.mark.parametrize("option", ["-no-glob", "-noglob"])
def test_no_glob(option, quiet_context):
    opts, _ = scan([option], quiet_context)

    assert opts.glob_output == GlobOutput.none()


def test_dump_glob_sets_single_file(quiet_context):
    opts, _ = scan(["-no-glob", "-dump-glob", "globs.txt"], quiet_context)

    assert opts.glob_output.kind is GlobOutputKind.SINGLE_FILE
    assert opts.glob_output.path == "globs.txt"


def test_outputstate_last_write_wins(quiet_context):
    opts, _ = scan(["-outputstate", "s1", "-outputstate", "s2"], quiet_context)

    assert opts.output_state_file == "s2"


# -------------------------
# Deprecated options
# -------------------------


@pytest.mark.parametrize("option", ["-opt", "-byte"])
def test_deprecated_noop_warns(option, context, capsys):
    opts, extras = scan([option], context)

    assert opts == DEFAULT_COMPILE_ARGS
    assert extras == []
    assert f"Option {option} is a noop and deprecated" in capsys.readouterr().err


def test_image_discards_its_argument(context, capsys):
    opts, extras = scan(["-image", "coqtop.exe", "a.v"], context)

    assert opts == DEFAULT_COMPILE_ARGS
    assert extras == ["a.v"]
    assert "Option -image is a noop and deprecated" in capsys.readouterr().err


def test_outputstate_warns_once(context, capsys):
    scan(["-outputstate", "s1", "-outputstate", "s2"], context)

    err = capsys.readouterr().err
    assert err.count("The outputstate option is deprecated and discouraged.") == 1


# -------------------------
# Compilation modes
# -------------------------


def test_quick_sets_partial(quiet_context):
    opts, _ = scan(["-quick"], quiet_context)

    assert opts.compilation_mode is CompilationMode.PARTIAL


def test_quick_twice_is_idempotent(quiet_context):
    opts, _ = scan(["-quick", "-quick"], quiet_context)

    assert opts.compilation_mode is CompilationMode.PARTIAL


@pytest.mark.parametrize(
    "tokens",
    [
        ["-quick", "-vio2vo", "a.vio"],
        ["-vio2vo", "a.vio", "-quick"],
    ],
)
def test_quick_and_vio2vo_are_exclusive(tokens, quiet_context):
    with pytest.raises(ModeConflictError) as exc:
        scan(tokens, quiet_context)

    assert "exclusive" in exc.value.message


def test_mode_conflict_names_both_modes(quiet_context):
    with pytest.raises(ModeConflictError) as exc:
        scan(["-quick", "-vio2vo", "a.vio"], quiet_context)

    assert exc.value.current is CompilationMode.PARTIAL
    assert exc.value.requested is CompilationMode.PARTIAL_TO_FINAL
    assert exc.value.hints == [
        "compilation mode already set to partial, cannot switch to partial_to_final",
    ]


def test_set_compilation_mode_from_standard():
    opts = set_compilation_mode(CompileArgsDraft(), CompilationMode.PARTIAL_TO_FINAL)

    assert opts.compilation_mode is CompilationMode.PARTIAL_TO_FINAL


def test_set_compilation_mode_to_standard_after_partial_conflicts():
    opts = CompileArgsDraft(compilation_mode=CompilationMode.PARTIAL)

    with pytest.raises(ModeConflictError):
        set_compilation_mode(opts, CompilationMode.STANDARD)


def test_vio2vo_adds_non_verbose_compile_entry(quiet_context):
    opts, extras = scan(["-verbose", "-vio2vo", "a.vio", "-vio2vo", "./b.vio"], quiet_context)

    assert opts.compilation_mode is CompilationMode.PARTIAL_TO_FINAL
    assert opts.compile_list == (
        CompileEntry("./a.vio", False),
        CompileEntry("./b.vio", False),
    )
    assert extras == []


def test_vio2vo_rejects_option_looking_file(quiet_context):
    with pytest.raises(UnknownOptionError) as exc:
        scan(["-vio2vo", "-quick"], quiet_context)

    assert exc.value.option == "-quick"


# -------------------------
# Partial-compilation scheduling
# -------------------------


def test_schedule_vio_checking_collects_until_option(quiet_context):
    opts, extras = scan(
        ["-schedule-vio-checking", "3", "a.vo", "b.vo", "c.vo", "-verbose"],
        quiet_context,
    )

    assert opts.vio_checking is True
    assert opts.vio_files_concurrency == 3
    assert opts.vio_files == ("a.vo", "b.vo", "c.vo")
    assert opts.echo_all is True
    assert extras == []


def test_schedule_vio2vo_does_not_enable_checking(quiet_context):
    opts, _ = scan(["-schedule-vio2vo", "2", "a.vio"], quiet_context)

    assert opts.vio_checking is False
    assert opts.vio_files_concurrency == 2
    assert opts.vio_files == ("a.vio",)


def test_schedule_requires_one_file(quiet_context):
    with pytest.raises(MissingArgumentError):
        scan(["-schedule-vio2vo", "2"], quiet_context)


def test_schedule_first_file_may_look_like_an_option(quiet_context):
    opts, extras = scan(["-schedule-vio2vo", "2", "-odd.vio", "x.vio"], quiet_context)

    assert opts.vio_files == ("-odd.vio", "x.vio")
    assert extras == []


def test_repeated_schedule_accumulates_files_and_overwrites_workers(quiet_context):
    opts, _ = scan(
        ["-schedule-vio2vo", "2", "a.vio", "-schedule-vio-checking", "5", "b.vo"],
        quiet_context,
    )

    assert opts.vio_files == ("a.vio", "b.vo")
    assert opts.vio_files_concurrency == 5
    assert opts.vio_checking is True


def test_schedule_with_malformed_worker_count(quiet_context):
    with pytest.raises(MalformedNumberError) as exc:
        scan(["-schedule-vio-checking", "many", "a.vo"], quiet_context)

    assert exc.value.code == "ARG-0030"
    assert exc.value.value == "many"


def test_check_vio_tasks_preserves_occurrence_order(quiet_context):
    opts, _ = scan(
        ["-check-vio-tasks", "1,2,3", "tasks.txt", "-check-vio-tasks", "4", "other.txt"],
        quiet_context,
    )

    assert opts.vio_tasks == (
        VioTask((1, 2, 3), "tasks.txt"),
        VioTask((4,), "other.txt"),
    )


def test_check_vio_tasks_rejects_non_numeric_ids(quiet_context):
    with pytest.raises(MalformedNumberError) as exc:
        scan(["-check-vio-tasks", "x,y", "f.txt"], quiet_context)

    assert exc.value.code == "ARG-0040"
    assert "comma-separated list of integers" in exc.value.message


def test_check_vio_tasks_requires_file(quiet_context):
    with pytest.raises(MissingArgumentError):
        scan(["-check-vio-tasks", "1"], quiet_context)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1,2,3", (1, 2, 3)),
        ("1,2,", (1, 2)),
        (",1,2", (1, 2)),
        ("", ()),
        (",", ()),
        ("0x10,0b11", (16, 3)),
    ],
)
def test_parse_task_list_ignores_one_outer_separator(value, expected):
    assert parse_task_list("-check-vio-tasks", value) == expected


@pytest.mark.parametrize("value", ["1,,2", ",,1", "1,,", "1, 2", "1,x"])
def test_parse_task_list_rejects_inner_empty_and_malformed_items(value):
    with pytest.raises(MalformedNumberError):
        parse_task_list("-check-vio-tasks", value)


def test_split_task_list_keeps_inner_empty_items():
    assert split_task_list("1,,2") == ["1", "", "2"]
    assert split_task_list(",1,") == ["1"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("4", 4),
        ("-4", -4),
        ("+4", 4),
        ("0x3", 3),
        ("0XfF", 255),
        ("0o17", 15),
        ("0b101", 5),
        ("0u42", 42),
        ("1_000", 1000),
        ("1_", 1),
        ("007", 7),
        (str(MAX_INT), MAX_INT),
        (str(MIN_INT), MIN_INT),
        ("0x7fffffffffffffff", -1),
        ("0x4000000000000000", MIN_INT),
    ],
)
def test_parse_int_literal_accepts(text, expected):
    assert parse_int_literal(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        " 3",
        "3 ",
        "4.5",
        "_1",
        "0x",
        "0x_1",
        "0b2",
        "12a",
        "--1",
        str(MAX_INT + 1),
        str(MIN_INT - 1),
        "0x8000000000000000",
        "٣",
    ],
)
def test_parse_int_literal_rejects(text):
    with pytest.raises(ValueError):
        parse_int_literal(text)


def test_parse_worker_count():
    assert parse_worker_count("-schedule-vio2vo", "4") == 4
    assert parse_worker_count("-schedule-vio2vo", "0x3") == 3
    with pytest.raises(MalformedNumberError):
        parse_worker_count("-schedule-vio2vo", "4.5")
    with pytest.raises(MalformedNumberError):
        parse_worker_count("-schedule-vio2vo", " 3 ")


def test_schedule_accepts_hex_worker_count(quiet_context):
    opts, _ = scan(["-schedule-vio2vo", "0x3", "a.vo"], quiet_context)

    assert opts.vio_files_concurrency == 3


def test_check_vio_tasks_rejects_inner_empty_item(quiet_context):
    with pytest.raises(MalformedNumberError):
        scan(["-check-vio-tasks", "1,,2", "f"], quiet_context)


# -------------------------
# Long command lines
# -------------------------


def test_long_schedule_run_scans_in_linear_time(quiet_context):
    files = [f"m{i}.vio" for i in range(200_000)]

    start = time.perf_counter()
    opts, extras = scan(["-schedule-vio2vo", "2", *files], quiet_context)
    elapsed = time.perf_counter() - start

    assert opts.vio_files == tuple(files)
    assert extras == []
    assert elapsed < 5.0


def test_long_list_of_bare_files_is_folded_in_linear_time(quiet_context):
    files = [f"m{i}.v" for i in range(200_000)]

    start = time.perf_counter()
    args = parse_compile_args(files, quiet_context)
    elapsed = time.perf_counter() - start

    assert len(args.compile_list) == len(files)
    assert args.compile_list[-1] == CompileEntry("./m199999.v", False)
    assert elapsed < 5.0


# -------------------------
# Interpreter internals
# -------------------------


def test_add_compile_uses_echo_flag_by_default():
    opts = add_compile(CompileArgsDraft(echo_all=True), "a.v")

    assert opts.compile_list == [CompileEntry("./a.v", True)]


def test_handler_returning_wrong_type_is_internal_error(monkeypatch, quiet_context):
    monkeypatch.setitem(OPTION_HANDLERS, "-quick", lambda opts, cursor, context: None)
    cursor = ArgCursor(["a.v", "-quick"])
    extras = []
    opts = interpret_option(CompileArgsDraft(), cursor, quiet_context, extras)

    with pytest.raises(InternalCompilerError) as exc:
        interpret_option(opts, cursor, quiet_context, extras)

    assert exc.value.loc.position == 2
    assert exc.value.loc.token == "-quick"
