"""Tests for the CPU stepper."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from crt_cpu import CPU, InstructionError
from crt_cpu.registry import Addx, Noop

SMALL_PROGRAM = "noop\naddx 3\naddx -5\n"


class TestCPUInitialState:
    """Test CPU construction and program loading."""

    def test_initial_state(self):
        cpu = CPU(SMALL_PROGRAM)
        assert cpu.ip == 0
        assert cpu.cycle_count == 0
        assert cpu.passes == 0
        assert cpu.get_register("x") == 1
        assert cpu.cycles_per_pass() == 5

    def test_load_from_instruction_list(self):
        """Loaded instructions are copied, not shared with the caller."""
        program = [Noop(), Addx((2,))]
        cpu = CPU(program)
        cpu.run(3)
        assert program[1].cycles_remaining == 2
        assert cpu.passes == 1

    def test_invalid_source_raises(self):
        with pytest.raises(InstructionError):
            CPU("noop\nbogus")

    def test_no_program(self):
        cpu = CPU()
        assert cpu.current_instruction() is None
        with pytest.raises(RuntimeError, match="No program loaded"):
            cpu.tick()

    def test_invalid_register(self):
        cpu = CPU(SMALL_PROGRAM)
        with pytest.raises(KeyError):
            cpu.get_register("y")


class TestCPUStepping:
    """Test cycle-by-cycle execution."""

    @pytest.fixture
    def cpu(self):
        return CPU(SMALL_PROGRAM)

    def test_register_timeline(self, cpu):
        """x during cycles 1..5 is 1, 1, 1, 4, 4."""
        during = []
        for _ in range(5):
            during.append(cpu.registers.x)
            cpu.tick()
        assert during == [1, 1, 1, 4, 4]

    def test_instruction_pointer_advances_on_completion(self, cpu):
        assert cpu.tick() is True        # noop
        assert cpu.ip == 1
        assert cpu.tick() is False       # addx 3, first cycle
        assert cpu.ip == 1
        assert cpu.tick() is True        # addx 3, second cycle
        assert cpu.ip == 2
        assert cpu.get_register() == 4

    def test_run(self, cpu):
        cpu.run(4)
        assert cpu.cycle_count == 4
        assert cpu.ip == 2
        assert isinstance(cpu.current_instruction(), Addx)


class TestCPUWrapAround:
    """Test the program looping back to its start."""

    @pytest.fixture
    def cpu(self):
        return CPU(SMALL_PROGRAM, trace=True)

    def test_wrap_resets_state(self, cpu):
        """After a full pass: back at instruction 0 with x = 1."""
        cpu.run(5)
        assert cpu.passes == 1
        assert cpu.ip == 0
        assert cpu.get_register("x") == 1
        assert all(i.cycles_remaining == i.CYCLES for i in cpu.instructions)

    def test_last_cycle_effect_visible_in_trace(self, cpu):
        cpu.run(5)
        assert cpu.trace[-1].post_state == {"x": -1}
        assert cpu.trace[-1].completed is True

    def test_passes_repeat_identically(self, cpu):
        cpu.run(15)
        timelines = [
            [entry.pre_state["x"] for entry in cpu.trace[i:i + 5]]
            for i in range(0, 15, 5)
        ]
        assert timelines[0] == timelines[1] == timelines[2]
        assert cpu.passes == 3

    def test_source_program_untouched(self, cpu):
        cpu.run(7)
        assert all(i.cycles_remaining == i.CYCLES for i in cpu.program)


class TestCPUBudget:
    """Test the max cycles safety limit."""

    def test_max_cycles_stops_execution(self):
        cpu = CPU(SMALL_PROGRAM, max_cycles=10)
        cpu.run(10)
        with pytest.raises(RuntimeError, match="Max cycles"):
            cpu.tick()
        assert cpu.cycle_count == 10

    def test_unlimited(self):
        cpu = CPU(SMALL_PROGRAM, max_cycles=None)
        cpu.run(CPU.DEFAULT_MAX_CYCLES + 5)
        assert cpu.cycle_count == CPU.DEFAULT_MAX_CYCLES + 5

    def test_reset_restores_budget(self):
        cpu = CPU(SMALL_PROGRAM, max_cycles=3)
        cpu.run(3)
        cpu.reset()
        assert cpu.cycle_count == 0
        cpu.run(3)


class TestExecutionTrace:
    """Test execution trace functionality."""

    def test_trace_disabled_by_default(self):
        cpu = CPU(SMALL_PROGRAM)
        cpu.run(5)
        assert cpu.trace == []

    def test_trace_records_all_cycles(self):
        cpu = CPU(SMALL_PROGRAM, trace=True)
        cpu.run(5)

        assert len(cpu.trace) == 5
        assert [e.instruction for e in cpu.trace] == [
            "noop", "addx 3", "addx 3", "addx -5", "addx -5"
        ]
        assert [e.cycle for e in cpu.trace] == [1, 2, 3, 4, 5]

    def test_trace_captures_state_changes(self):
        cpu = CPU(SMALL_PROGRAM, trace=True)
        cpu.run(3)
        assert cpu.trace[1].pre_state == cpu.trace[1].post_state == {"x": 1}
        assert cpu.trace[2].pre_state == {"x": 1}
        assert cpu.trace[2].post_state == {"x": 4}

    def test_print_trace(self, capsys):
        cpu = CPU(SMALL_PROGRAM, trace=True)
        cpu.run(3)
        cpu.print_trace()
        out = capsys.readouterr().out
        assert "x: 1 -> 4" in out
        assert "Cycles: 3" in out

    def test_summary(self):
        cpu = CPU(SMALL_PROGRAM, trace=True)
        cpu.run(6)
        summary = cpu.get_summary()
        assert summary["cycles"] == 6
        assert summary["passes"] == 1
        assert summary["registers"] == {"x": 1}
        assert summary["ip"] == 1
        assert summary["program_length"] == 3
        assert summary["cycles_per_pass"] == 5
        assert summary["trace_length"] == 6
