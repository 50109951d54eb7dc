#!/usr/bin/env python3
"""
Quick Start Guide for HTML to JSX Transform.

Walks through the two API levels: the one-call conversion functions and the
configured converter with diagnostics and metrics.
"""

from html_to_jsx_transform import (
    ConverterConfig,
    HTMLToJSXConverter,
    html_to_jsx,
    parse,
    render,
)

SAMPLE_HTML = """
<div class="card" style="padding: 8px; -webkit-box-shadow: 0 0 2px #000">
  <!-- Card header -->
  <label for="email">Email <b>address</b></label>
  <input id="email" type="email" disabled>
  <p>Use {braces} and a < b freely &amp; safely
</div>
"""


def level_one_example():
    """Convert markup with the simple functions."""
    print("STEP 1: html_to_jsx()")
    print("-" * 30)
    print(html_to_jsx(SAMPLE_HTML))

    print("\nSTEP 2: parse() then render()")
    print("-" * 30)
    nodes = parse('<ul><li class="first">a</li><li>b</li></ul>')
    print(f"Top-level nodes: {len(nodes)}, first tag: {nodes[0].tag}")
    print(render(nodes))


def level_two_example():
    """Convert markup with a configured converter."""
    print("\nSTEP 3: HTMLToJSXConverter")
    print("-" * 30)

    config = ConverterConfig().override(
        renderer__indent_size=4,
        renderer__preserve_comments=False,
    )
    converter = HTMLToJSXConverter(config, correlation_id="quick-start")
    result = converter.convert(SAMPLE_HTML)

    print(result.jsx)
    print(f"\nRepairs applied: {result.repair_count}")
    for diagnostic in result.diagnostics:
        print(f"  - {diagnostic.severity.name} [{diagnostic.component}]: {diagnostic.message}")

    performance = result.performance
    print(f"Processing time: {performance.processing_time_ms:.2f} ms")
    print(f"Throughput: {performance.characters_per_second:,.0f} chars/sec")


def main():
    level_one_example()
    level_two_example()


if __name__ == "__main__":
    main()
