"""Panel GUI for Protein A elution predictions.

A single-page interface:
1. Enter the ligand sequence (highlighted, with residue counts)
2. Choose ligand, target and process parameters
3. Run the prediction and inspect metrics, warnings and the chromatogram
4. Compare all elution strategies for the current settings

Run with:
    panel serve app.py --show --autoreload

Or programmatically:
    from proa_elution.app import serve
    serve(port=5006)
"""

import panel as pn
import param
import pandas as pd

pn.extension('tabulator', notifications=True)

from .configs import MolecularConstants, get_molecular_constants
from .core import ElutionStrategy, LigandFormat, LigandVariant, TargetMolecule
from .core.dataclasses import SimulationResult
from .sequence import highlight_sequence, normalize_sequence
from .simulation import SimulationRunner
from .plotting import plot_elution_profile, plot_strategy_overlay


# B domain derived Z domain
DEFAULT_SEQUENCE = "VDNKFNKEQQNAFYEILHLPNLNEEQRNAFIQSLKDDPSQSANLLAEAKKLNDAQAPK"

HIGHLIGHT_CSS = """
.histidine { background: #fde68a; font-weight: bold; }
.asparagine { background: #fecaca; }
.glutamine { background: #fed7aa; }
.tyrosine, .phenylalanine { background: #bfdbfe; }
.cysteine { background: #d9f99d; }
:host { font-family: monospace; word-break: break-all; }
"""

METRIC_CARDS = [
    ("alkaline_stability", "Alkaline Stability", "%"),
    ("dynamic_binding_capacity", "Binding Capacity", "mg/mL"),
    ("aggregation_risk", "Aggregation Risk", "%"),
    ("ligand_leakage", "Ligand Leakage", "µg/mL"),
    ("elution_sharpness", "Elution Sharpness", ""),
]


class ProteinASimulatorApp(param.Parameterized):
    """Protein A elution prediction application.

    Workflow:
    1. Sequence: paste a ligand sequence
    2. Parameters: select ligand, target and process settings
    3. Predict: run and view the results
    4. Compare: overlay all elution strategies
    """

    # Ligand configuration
    sequence = param.String(default=DEFAULT_SEQUENCE, doc="Ligand sequence (one-letter code)")
    ligand_variant = param.Selector(
        default=LigandVariant.WILD_TYPE.value,
        objects=[v.value for v in LigandVariant],
        doc="Protein A ligand variant",
    )
    ligand_format = param.Selector(
        default=LigandFormat.MONOMERIC.value,
        objects=[f.value for f in LigandFormat],
        doc="Number of domains per ligand",
    )

    # Process parameters
    target_molecule = param.Selector(
        default=TargetMolecule.HUMAN_IGG1.value,
        objects=[t.value for t in TargetMolecule],
        doc="Target antibody",
    )
    elution_strategy = param.Selector(
        default=ElutionStrategy.TRADITIONAL.value,
        objects=[s.value for s in ElutionStrategy],
        doc="Elution gradient program",
    )
    target_concentration = param.Number(default=5.0, bounds=(0.1, 50.0), doc="Feed concentration (mg/mL)")
    column_volume = param.Number(default=10.0, bounds=(0.1, 1000.0), doc="Column volume (mL)")
    flow_rate = param.Number(default=1.0, bounds=(0.1, 100.0), doc="Flow rate (mL/min)")
    loading_capacity = param.Number(default=40.0, bounds=(1.0, 200.0), doc="Loading (mg/mL resin)")
    temperature = param.Number(default=25.0, bounds=(2.0, 40.0), doc="Temperature (°C)")
    gradient_time = param.Number(default=60.0, bounds=(5.0, 240.0), doc="Gradient time (min)")

    x_axis = param.Selector(default="minutes", objects=["minutes", "cv"], doc="Chromatogram x-axis")

    # Status
    status = param.String(default="Ready. Enter a sequence and run the prediction.")

    def __init__(
        self,
        constants: MolecularConstants | None = None,
        seed: int | None = None,
        **params
    ):
        super().__init__(**params)
        self.constants = constants or get_molecular_constants()
        self.runner = SimulationRunner(constants=self.constants, seed=seed)

        # State
        self._result: SimulationResult | None = None

        self._build_ui()

    def _build_ui(self):
        """Build UI components."""
        # === Sequence ===
        self._sequence_input = pn.widgets.TextAreaInput.from_param(
            self.param.sequence,
            name="Protein A Ligand Sequence",
            height=120,
            sizing_mode='stretch_width',
        )
        self._highlight_pane = pn.pane.HTML(sizing_mode='stretch_width', stylesheets=[HIGHLIGHT_CSS])
        self._residue_table = pn.widgets.Tabulator(
            pd.DataFrame(),
            height=90,
            sizing_mode='stretch_width',
            disabled=True,
            show_index=False,
        )

        # === Parameters ===
        self._parameter_column = pn.Column(
            pn.pane.Markdown("### Ligand"),
            pn.widgets.Select.from_param(self.param.ligand_variant, name="Ligand Variant"),
            pn.widgets.Select.from_param(self.param.ligand_format, name="Ligand Format"),
            pn.pane.Markdown("### Process"),
            pn.widgets.Select.from_param(self.param.target_molecule, name="Target Molecule"),
            pn.widgets.Select.from_param(self.param.elution_strategy, name="Elution Strategy"),
            pn.widgets.FloatInput.from_param(self.param.target_concentration, name="Concentration (mg/mL)"),
            pn.widgets.FloatInput.from_param(self.param.column_volume, name="Column Volume (mL)"),
            pn.widgets.FloatInput.from_param(self.param.flow_rate, name="Flow Rate (mL/min)"),
            pn.widgets.FloatInput.from_param(self.param.loading_capacity, name="Loading (mg/mL)"),
            pn.widgets.FloatSlider.from_param(self.param.temperature, name="Temperature (°C)", step=0.5),
            pn.widgets.FloatInput.from_param(self.param.gradient_time, name="Gradient Time (min)"),
            width=300,
        )

        # === Actions ===
        self._run_btn = pn.widgets.Button(
            name="Predict Elution",
            button_type="primary",
            width=200,
        )
        self._run_btn.on_click(self._on_run)

        self._compare_btn = pn.widgets.Button(
            name="Compare Strategies",
            button_type="default",
            width=200,
        )
        self._compare_btn.on_click(self._on_compare)

        self._x_axis_select = pn.widgets.Select.from_param(
            self.param.x_axis,
            name="X-Axis",
            width=180,
        )

        # === Results ===
        self._status_pane = pn.pane.Alert(self.status, alert_type="info")
        self._metrics_row = pn.Row(sizing_mode='stretch_width')
        self._warnings_column = pn.Column(sizing_mode='stretch_width')
        self._plot_area = pn.Column(
            pn.pane.Markdown("*Run a prediction to see the chromatogram*"),
            sizing_mode='stretch_width',
        )
        self._results_table = pn.widgets.Tabulator(
            pd.DataFrame(),
            height=220,
            sizing_mode='stretch_width',
            disabled=True,
            show_index=False,
        )
        self._compare_area = pn.Column(sizing_mode='stretch_width')

        self._update_sequence_preview()

    @param.depends('sequence', 'ligand_format', watch=True)
    def _update_sequence_preview(self):
        """Refresh highlighted sequence and residue counts."""
        domain_count = LigandFormat.parse(self.ligand_format).domain_count
        self._highlight_pane.object = highlight_sequence(self.sequence, domain_count)

        clean = normalize_sequence(self.sequence)
        counts = {
            "Length": len(clean),
            "His (H)": clean.count("H"),
            "Asn (N)": clean.count("N"),
            "Gln (Q)": clean.count("Q"),
            "Aromatic (Y/F/W)": sum(clean.count(r) for r in "YFW"),
            "Cys (C)": clean.count("C"),
        }
        self._residue_table.value = pd.DataFrame([counts])

    @param.depends('x_axis', watch=True)
    def _on_x_axis_change(self):
        if self._result is not None:
            self._show_chromatogram(self._result)

    def _current_parameters(self) -> dict:
        """Collect the form values as a parameter dict."""
        return {
            "ligand_variant": self.ligand_variant,
            "ligand_format": self.ligand_format,
            "target_molecule": self.target_molecule,
            "target_concentration": self.target_concentration,
            "column_volume": self.column_volume,
            "flow_rate": self.flow_rate,
            "loading_capacity": self.loading_capacity,
            "temperature": self.temperature,
            "elution_strategy": self.elution_strategy,
            "gradient_time": self.gradient_time,
        }

    def _on_run(self, event):
        """Validate the form and run one prediction."""
        parameters = self._current_parameters()
        validation = self.runner.validate(self.sequence, parameters, name="prediction")

        if not validation.valid:
            self._result = None
            self.status = "; ".join(validation.errors)
            self._update_status("danger")
            return

        run = self.runner.run(self.sequence, parameters, name="prediction")
        if not run.success:
            self._result = None
            self.status = "; ".join(run.errors)
            self._update_status("danger")
            return

        self._result = run.result
        peak = run.result.peak_info
        self.status = (
            f"Completed in {run.runtime_seconds:.3f}s. "
            f"Peak at pH {peak.ph} ({peak.time} min)."
        )
        self._update_status("warning" if run.result.warnings else "success")

        self._show_metrics(run.result)
        self._show_warnings(run.result)
        self._show_chromatogram(run.result)
        self._results_table.value = self._create_summary_table(run.result)

    def _on_compare(self, event):
        """Run every elution strategy and overlay the profiles."""
        parameters = self._current_parameters()
        try:
            runs = self.runner.compare_strategies(self.sequence, parameters)
        except ValueError as e:
            self._compare_area.objects = [
                pn.pane.Alert(f"Could not compare strategies: {e}", alert_type="danger")
            ]
            return

        successful = [(s.value, r.result) for s, r in runs.items() if r.success]
        failed = [r for r in runs.values() if not r.success]

        components = [pn.pane.Markdown("### Strategy Comparison")]
        for run in failed:
            error_msg = "; ".join(run.errors[:2]) if run.errors else "Unknown error"
            components.append(pn.pane.Alert(f"{run.name}: Failed - {error_msg}", alert_type="danger"))

        if successful:
            plot = plot_strategy_overlay(successful, x_axis=self.x_axis)
            components.append(pn.pane.HoloViews(plot, sizing_mode='stretch_width'))
            rows = []
            for label, result in successful:
                rows.append({
                    "Strategy": label,
                    "Peak pH": result.peak_info.ph,
                    "Peak Time (min)": result.peak_info.time,
                    "Peak Width (min)": result.peak_info.peak_width,
                    "Productivity (g/L/h)": result.productivity,
                    "Warnings": len(result.warnings),
                })
            components.append(pn.widgets.Tabulator(
                pd.DataFrame(rows),
                sizing_mode='stretch_width',
                disabled=True,
                show_index=False,
            ))

        self._compare_area.objects = components

    def _show_metrics(self, result: SimulationResult):
        cards = []
        for attr, label, unit in METRIC_CARDS:
            value = getattr(result.metrics, attr)
            cards.append(pn.indicators.Number(
                name=label,
                value=value,
                format=f"{{value}} {unit}".strip(),
                font_size="24pt",
                title_size="10pt",
            ))
        cards.append(pn.indicators.Number(
            name="Binding Affinity (Ka)",
            value=result.metrics.binding_affinity,
            format="{value:.2e} M⁻¹",
            font_size="24pt",
            title_size="10pt",
        ))
        self._metrics_row.objects = cards

    def _show_warnings(self, result: SimulationResult):
        if not result.warnings:
            self._warnings_column.objects = [
                pn.pane.Alert("No process warnings", alert_type="success")
            ]
            return
        self._warnings_column.objects = [
            pn.pane.Alert(f"**{w.title}**: {w.message}", alert_type="warning")
            for w in result.warnings
        ]

    def _show_chromatogram(self, result: SimulationResult):
        try:
            plot = plot_elution_profile(result, x_axis=self.x_axis)
            self._plot_area.objects = [pn.pane.HoloViews(plot, sizing_mode='stretch_width')]
        except ValueError as e:
            self._plot_area.objects = [
                pn.pane.Alert(f"Could not create plot: {e}", alert_type="warning")
            ]

    def _create_summary_table(self, result: SimulationResult) -> pd.DataFrame:
        """Create summary table of one prediction."""
        peak = result.peak_info
        rows = [
            ("Peak Time", peak.time, "min"),
            ("Peak pH", peak.ph, ""),
            ("Peak Intensity", peak.intensity, "mAU"),
            ("Peak Width (FWHM)", peak.peak_width, "min"),
            ("Recovery Yield", result.recovery_yield, "%"),
            ("Purity", result.purity, "%"),
            ("Productivity", result.productivity, "g/L/h"),
        ]
        return pd.DataFrame(rows, columns=["Quantity", "Value", "Unit"])

    def _update_status(self, alert_type: str):
        """Update status pane."""
        self._status_pane.alert_type = alert_type
        self._status_pane.object = self.status

    def view(self) -> pn.viewable.Viewable:
        """Create the main application view."""
        sequence_section = pn.Column(
            pn.pane.Markdown("## 1. Ligand Sequence"),
            self._sequence_input,
            self._highlight_pane,
            self._residue_table,
            sizing_mode='stretch_width',
        )

        results_section = pn.Column(
            pn.pane.Markdown("## 2. Prediction"),
            pn.Row(self._run_btn, self._compare_btn, self._x_axis_select),
            self._metrics_row,
            self._warnings_column,
            self._plot_area,
            self._results_table,
            pn.layout.Divider(),
            self._compare_area,
            sizing_mode='stretch_width',
        )

        layout = pn.Column(
            pn.pane.Markdown("# Protein A Elution Predictor"),
            self._status_pane,
            pn.Row(
                self._parameter_column,
                pn.Column(sequence_section, results_section, sizing_mode='stretch_width'),
                sizing_mode='stretch_width',
            ),
            sizing_mode='stretch_width',
        )

        return layout


def create_app(
    constants_path: str | None = None,
    seed: int | None = None,
) -> ProteinASimulatorApp:
    """Create the application.

    Parameters
    ----------
    constants_path : str, optional
        Path to an alternative molecular constants JSON file
    seed : int, optional
        Seed for the intensity noise

    Returns
    -------
    ProteinASimulatorApp
        The application instance
    """
    from .configs import load_molecular_constants

    constants = load_molecular_constants(constants_path) if constants_path else None
    return ProteinASimulatorApp(constants=constants, seed=seed)


def serve(
    constants_path: str | None = None,
    seed: int | None = None,
    **kwargs
):
    """Serve the application.

    Parameters
    ----------
    constants_path : str, optional
        Path to an alternative molecular constants JSON file
    seed : int, optional
        Seed for the intensity noise
    **kwargs
        Additional arguments passed to pn.serve()
    """
    app = create_app(constants_path=constants_path, seed=seed)
    pn.serve(app.view(), **kwargs)


# For panel serve
if __name__.startswith("bokeh"):
    app = create_app()
    app.view().servable()
