import os
import subprocess
import shutil
import sys

from trip_loader import TRIP_CSV
from rider_plots import OUTPUT_DIR
from member_casual_report import run_report, table_titles

TEX_NAME = "member_casual_report.tex"
PDF_NAME = "member_casual_report.pdf"

# Tables with more rows than this are left to the CSV files
MAX_TABLE_ROWS = 60

PREAMBLE = r"""
\documentclass[11pt]{article}
\usepackage[utf8]{inputenc}
\usepackage[margin=1in]{geometry}
\usepackage{graphicx}
\usepackage{float}
\usepackage{booktabs}
\usepackage{longtable}
\title{How Members and Casual Riders Use Divvy Bikes}
\date{\today}

\begin{document}
\maketitle
"""

LATEX_SPECIAL = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def escape_latex(text):
    return "".join(LATEX_SPECIAL.get(ch, ch) for ch in str(text))


def _cell(value):
    if isinstance(value, float):
        return f"{value:.2f}"
    return escape_latex(value)


def latex_table(table, caption):
    cols = list(table.columns)
    lines = [
        r"\begin{longtable}{" + "l" * len(cols) + "}",
        r"\caption{" + escape_latex(caption) + r"}\\",
        r"\toprule",
        " & ".join(escape_latex(c) for c in cols) + r" \\",
        r"\midrule",
    ]
    for row in table.itertuples(index=False):
        lines.append(" & ".join(_cell(v) for v in row) + r" \\")
    lines += [r"\bottomrule", r"\end{longtable}"]
    return "\n".join(lines)


def latex_figure(image_path):
    fname = os.path.basename(image_path)
    caption = os.path.splitext(fname)[0].replace("_", " ").title()
    return "\n".join([
        r"\begin{figure}[H]",
        r"\centering",
        r"\includegraphics[width=0.85\textwidth]{" + fname + "}",
        r"\caption{" + escape_latex(caption) + "}",
        r"\end{figure}",
    ])


def write_latex_report(tables, images, output_dir=OUTPUT_DIR, titles=None):
    titles = table_titles() if titles is None else titles
    body = [PREAMBLE, r"\section{Summary Tables}"]
    for name, table in tables.items():
        if len(table) > MAX_TABLE_ROWS:
            continue
        body.append(latex_table(table, titles.get(name, name)))
    body.append(r"\section{Charts}")
    body.extend(latex_figure(p) for p in images)
    body.append(r"\end{document}")

    tex_path = os.path.join(output_dir, TEX_NAME)
    with open(tex_path, "w", encoding="utf-8") as f:
        f.write("\n\n".join(body))
    return tex_path


def compile_pdf(tex_path, output_dir=OUTPUT_DIR):
    pdflatex_cmd = shutil.which("pdflatex") or shutil.which("pdflatex.exe")
    if not pdflatex_cmd:
        print("'pdflatex' not found; skipping PDF build. The .tex file is ready to compile.")
        return None

    # graphics are referenced by bare file name, so compile inside output_dir
    subprocess.run(
        [pdflatex_cmd, "-interaction=nonstopmode", os.path.basename(tex_path)],
        cwd=output_dir,
        check=True,
    )
    return os.path.join(output_dir, PDF_NAME)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    trip_csv = argv[0] if argv else TRIP_CSV

    result = run_report(trip_csv)
    tex_path = write_latex_report(result["tables"], result["images"], titles=result["titles"])
    print(f"LaTeX source written to {tex_path}")

    try:
        pdf_path = compile_pdf(tex_path)
    except subprocess.CalledProcessError as e:
        print(f"LaTeX compilation failed with return code {e.returncode}.")
        sys.exit(e.returncode)
    if pdf_path:
        print(f"Report generated at {pdf_path}")


if __name__ == "__main__":
    main()
