"""crt-cpu Interactive Demo.

A Gradio web interface for running programs and viewing the CRT.

Usage:
    cd /path/to/crt-cpu
    python demo/gradio_app.py

Features:
    - Write or load programs
    - Signal strength reports at each checkpoint
    - Rendered 40x6 CRT image
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from crt_cpu import CPU, CRT, InstructionError, run_checksum, run_crt


PROGRAMS_DIR = Path(__file__).parent.parent / "programs"


def _read_example(name: str) -> str:
    path = PROGRAMS_DIR / name
    return path.read_text(encoding="utf-8") if path.exists() else ""


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Larger example": _read_example("larger_example.txt"),
    "Small example": _read_example("small_example.txt"),
    "Custom": ""
}


# =============================================================================
# Execution Functions
# =============================================================================

def run_program(program: str, crt_cycles: int) -> tuple:
    """Run both modes on a program and return results.

    Args:
        program: Program source
        crt_cycles: Cycles to scan the CRT for

    Returns:
        Tuple of (summary_text, checksum_text, crt_text)
    """
    if not program.strip():
        return "Error: No program provided", "", ""

    try:
        cpu = CPU(program, max_cycles=None)
    except InstructionError as e:
        return f"Error: {e}", "", ""

    # Checksum pass
    report_lines = [
        "SIGNAL STRENGTH",
        "=" * 40,
    ]
    total = 0
    for report in run_checksum(cpu):
        total = report.total
        report_lines.append(
            f"Cycle {report.cycle:>4}: x={report.registers['x']:>4}  "
            f"signal={report.signal:>6}  sum={report.total}"
        )
    report_lines.append("-" * 40)
    report_lines.append(f"Total: {total}")
    checksum_text = "\n".join(report_lines)

    # CRT pass on a fresh CPU
    cpu.reset()
    crt = CRT()
    rows = list(run_crt(cpu, crt, max_cycles=int(crt_cycles)))
    crt_text = crt.render()

    summary = cpu.get_summary()
    summary_text = "\n".join([
        "PROGRAM SUMMARY",
        "=" * 40,
        f"Instructions: {summary['program_length']}",
        f"Cycles per pass: {summary['cycles_per_pass']}",
        f"CRT rows completed: {len(rows)}",
        f"CRT cycles run: {summary['cycles']}",
    ])

    return summary_text, checksum_text, crt_text


def load_example(example_name: str) -> str:
    """Load an example program."""
    return EXAMPLE_PROGRAMS.get(example_name, "")


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="crt-cpu Demo", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # crt-cpu: Handheld CPU and CRT

        A single-register CPU runs `noop` / `addx` programs. Register `x`
        positions a 3-pixel sprite that a scanning beam samples once per cycle.
        """)

        with gr.Row():
            with gr.Column(scale=2):
                gr.Markdown("### Program")

                example_dropdown = gr.Dropdown(
                    choices=list(EXAMPLE_PROGRAMS.keys()),
                    value="Larger example",
                    label="Load Example"
                )

                program_input = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Larger example"],
                    label="Source Code",
                    lines=15,
                    placeholder="noop\naddx 3\naddx -5"
                )

                crt_cycles = gr.Slider(
                    minimum=1,
                    maximum=CRT.WIDTH * CRT.HEIGHT,
                    value=CRT.WIDTH * CRT.HEIGHT,
                    step=1,
                    label="CRT Cycles"
                )

                run_button = gr.Button("Run Program", variant="primary")

            with gr.Column(scale=3):
                with gr.Row():
                    summary_output = gr.Textbox(
                        label="Summary",
                        lines=8,
                        interactive=False
                    )
                    checksum_output = gr.Textbox(
                        label="Signal Strength",
                        lines=8,
                        interactive=False
                    )

                crt_output = gr.Textbox(
                    label="CRT",
                    lines=CRT.HEIGHT,
                    interactive=False
                )

        with gr.Accordion("ISA Reference", open=False):
            gr.Markdown("""
            | Instruction | Cycles | Effect |
            |-------------|--------|--------|
            | `noop` | 1 | none |
            | `addx V` | 2 | `x += V` after the second cycle |

            **Register**: `x`, starts at 1
            **Pixel rule**: lit when the beam column is `x-1`, `x` or `x+1`
            """)

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input]
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, crt_cycles],
            outputs=[summary_output, checksum_output, crt_output]
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
