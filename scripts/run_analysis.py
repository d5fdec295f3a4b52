#!/usr/bin/env python3
"""
Speech Analysis Script

Runs frame-by-frame LPC, pitch and cepstral analysis, trains a VQ
codebook over the cepstra and measures a reduced-bitrate coding round
trip. The input is a 1-D float signal stored with numpy.save, or a
synthetic sine described by the config's `signal` section.

Usage:
    python scripts/run_analysis.py [--config CONFIG_PATH] [--input SIGNAL.npy] [--output OUTPUT_DIR]
"""

import sys
import json
import argparse
from pathlib import Path
from datetime import datetime

import numpy as np
import yaml

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from speech_dsp import AnalysisConfig, SpeechAnalyzer, sine_wave
from speech_dsp.utils.audio import AudioProcessor
from speech_dsp.utils.logging import AnalysisLogger
from speech_dsp.utils.seed import set_seed

console = Console()


def load_signal(input_path: str, config: AnalysisConfig) -> np.ndarray:
    if input_path is None:
        return sine_wave(
            amplitude=config.amplitude,
            frequency=config.frequency,
            duration=config.duration,
            fs=config.sample_rate
        )
    signal = np.load(input_path)
    if signal.ndim != 1:
        raise ValueError(f"Expected a 1-D signal in {input_path}, got shape {signal.shape}")
    return AudioProcessor.normalize(signal.astype(np.float64))


def display_summary(summary: dict):
    table = Table(title="Analysis Summary", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in summary.items():
        table.add_row(key, f"{value:.2f}" if isinstance(value, float) else str(value))
    console.print(table)


def run_analysis(config_path: str, input_path: str, output_dir: Path) -> dict:
    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}
    config = AnalysisConfig.from_dict(raw_config)

    output_dir.mkdir(parents=True, exist_ok=True)
    run_logger = AnalysisLogger('analysis', log_dir=str(output_dir))
    run_logger.log_config(config.to_dict())

    seed = config.seed
    if seed is not None:
        set_seed(seed)
        run_logger.info(f"Random seed set to {seed}")

    console.print(Panel.fit(
        "[bold blue]Speech Analysis[/bold blue]\n"
        f"Frame: {config.frame_length} / hop {config.hop_length} | "
        f"LPC order: {config.lpc_order} | Codebook: {config.codebook_size}",
        border_style="blue"
    ))

    signal = load_signal(input_path, config)
    source = input_path or f"sine {config.frequency} Hz"
    console.print(f"[green]✓[/green] Loaded {len(signal)} samples ({source})")

    run_logger.log_stage_start('analysis')
    result = SpeechAnalyzer(config).analyze(signal)
    summary = result.summary()
    run_logger.log_stage_end('analysis', summary)
    run_logger.log_results(summary)

    display_summary(summary)

    with open(output_dir / 'summary.json', 'w') as f:
        json.dump(summary, f, indent=2)
    np.save(output_dir / 'codebook.npy', result.codebook)
    np.save(output_dir / 'lpc.npy', result.lpc)
    run_logger.close()

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return summary


def main():
    parser = argparse.ArgumentParser(description="Frame-by-frame speech analysis")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'default.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='Signal stored with numpy.save (default: synthetic sine from config)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory'
    )
    args = parser.parse_args()

    if args.output:
        output_dir = Path(args.output)
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_dir = PROJECT_ROOT / 'results' / timestamp

    try:
        run_analysis(args.config, args.input, output_dir)
        console.print(Panel.fit(
            "[bold green]Analysis completed![/bold green]",
            border_style="green"
        ))
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise


if __name__ == '__main__':
    main()
