"""Experiment file for the FrPrep preprocessing stage."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .config_data import ConfigData
from .errors import ConfigurationError

CONFIG_DEFS: Dict[str, str] = {
    "prep_experiment_ID": "string",  # experiment identifier
    "frprep_directory": "string",  # dir for frprep internal data
    # information about the dataset
    "language": "string",  # en, de
    "origin": "string",  # FrameNet, Salsa, or nothing
    "format": "string",  # Plain, SalsaTab, FNXml, FNCorpusXml, SalsaTigerXML
    "encoding": "string",  # utf8, iso, hex, or nothing
    # directories
    "directory_input": "string",
    "directory_preprocessed": "string",
    "directory_parserout": "string",
    # syntactic processing
    "pos_tagger": "string",
    "lemmatizer": "string",
    "parser": "string",
    "pos_tagger_path": "string",
    "lemmatizer_path": "string",
    "parser_path": "string",
    "parser_max_sent_num": "integer",
    "parser_max_sent_len": "integer",
    "do_parse": "bool",
    "do_lemmatize": "bool",
    "do_postag": "bool",
    # Tab format output instead of SalsaTigerXML; incompatible with do_parse
    "tabformat_output": "bool",
    # syntactic repairs, dependent on existing semantic role annotation
    "fe_syn_repair": "bool",
    "fe_rel_repair": "bool",
}

ENCODINGS = ("utf8", "iso", "hex")

_EXPERIMENT_ID_RE = re.compile(r"^[A-Za-z0-9_]+$")


class PrepConfigData(ConfigData):
    """Typed access to a FrPrep experiment file.

    ``overrides`` maps feature names to textual values given on the
    command line; they replace what the file says before validation.
    """

    def __init__(
        self,
        filename: Union[str, Path],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(filename, CONFIG_DEFS)
        for name, value in (overrides or {}).items():
            self.set_entry(name, value)
        self.validate()

    def convert_encoding(self) -> bool:
        """Whether input files have to be converted into UTF-8."""
        return self.get("encoding") != "utf8"

    def validate(self) -> None:
        problems: List[str] = []

        experiment_id = self.get("prep_experiment_ID")
        if not experiment_id or not _EXPERIMENT_ID_RE.match(experiment_id):
            problems.append(
                "Please choose an experiment ID <prep_experiment_ID> consisting "
                "only of the letters A-Za-z0-9_."
            )
        if not self.get("frprep_directory"):
            problems.append(
                "Please set <frprep_directory>, the FrPrep internal data "
                "directory, in the experiment file."
            )
        if not self.get("directory_input"):
            problems.append("Please specify <directory_input> in the experiment file.")
        if not self.get("directory_preprocessed"):
            problems.append("Please specify <directory_preprocessed> in the experiment file.")
        if self.get("tabformat_output") and self.get("do_parse"):
            problems.append(
                "Cannot do Tab format output when the input text is being parsed. "
                "Please set either <tabformat_output> or <do_parse> to false."
            )
        if not (self.get("pos_tagger") and self.get("pos_tagger_path")):
            problems.append(
                "POS Tagging: I need <pos_tagger> and <pos_tagger_path> in the experiment file."
            )
        if not (self.get("lemmatizer") and self.get("lemmatizer_path")):
            problems.append(
                "Lemmatization: I need <lemmatizer> and <lemmatizer_path> in the experiment file."
            )
        encoding = self.get("encoding")
        if encoding is not None and encoding not in ENCODINGS:
            problems.append(
                'Please define a correct encoding in the experiment file: '
                '"hex", "iso", "utf8" (default).'
            )

        if problems:
            raise ConfigurationError("\n".join(problems))


__all__ = ["CONFIG_DEFS", "ENCODINGS", "PrepConfigData"]
