# config.py
# defaults & constants
#

# GUI build shown in the header (MVP: nothing real is executed)
MVP_VERSION = "mvp-0.26.8"

# simulated tool versions reported once a fake install is done
FAKE_MICROMAMBA_VERSION = "MVP-fake-micromamba"
FAKE_VIRALFLOW_VERSION = "MVP-fake-viralflow"

# virus modes
VIRUS_SARS_COV2 = "sars-cov2"
VIRUS_CUSTOM = "custom"
VIRUS_MODES = (VIRUS_SARS_COV2, VIRUS_CUSTOM)

# ViralFlow defaults (from the argument table of the ViralFlow docs)
DEFAULT_PARAMS = {
    "virus": VIRUS_SARS_COV2,
    "primersBED": "",
    "outDir": "launchDir/output/",
    "inDir": "launchDir/input/",
    "runSnpEff": True,
    "writeMappedReads": True,
    "minLen": 75,
    "depth": 5,
    "mapping_quality": 30,
    "base_quality": 30,
    "minDpIntrahost": 100,
    "trimLen": 0,
    "refGenomeCode": "",
    "referenceGFF": "",
    "referenceGenome": "",
    "nextflowSimCalls": "",
    "fastp_threads": 1,
    "bwa_threads": 1,
    "dedup": False,
    "ndedup": 3,
}

# field order in a .params file
PARAMS_KEY_ORDER = (
    "virus",
    "primersBED",
    "outDir",
    "inDir",
    "runSnpEff",
    "writeMappedReads",
    "minLen",
    "depth",
    "mapping_quality",
    "base_quality",
    "minDpIntrahost",
    "trimLen",
    "refGenomeCode",
    "referenceGFF",
    "referenceGenome",
    "nextflowSimCalls",
    "fastp_threads",
    "bwa_threads",
    "dedup",
    "ndedup",
)

# field types
STRING_FIELDS = {
    "primersBED", "outDir", "inDir",
    "refGenomeCode", "referenceGFF", "referenceGenome",
    "nextflowSimCalls",
}
BOOL_FIELDS = {"runSnpEff", "writeMappedReads", "dedup"}
INT_FIELDS = {
    "minLen", "depth", "mapping_quality", "base_quality", "minDpIntrahost",
    "trimLen", "fastp_threads", "bwa_threads", "ndedup",
}

# conditional fields
CUSTOM_ONLY_FIELDS = ("refGenomeCode", "referenceGFF", "referenceGenome")  # - virus == custom
DEDUP_ONLY_FIELDS = ("ndedup",)                                           # - dedup == true

# .params file
PARAMS_HEADER = (
    "# ViralFlow params generated by ViralFlow GUI",
    "# See https://viralflow.github.io/ for argument descriptions",
)
NULL_TOKEN = "null"
RUN_PARAMS_FILENAME = "viralflow-gui.params"   # rewritten on every run
EXPORT_PARAMS_FILENAME = "viralflow.params"

# store files (under the store dir)
STORE_DIR_ENV = "VIRALFLOW_GUI_HOME"
STORE_DIR_NAME = ".viralflow_gui"
CONFIG_FILE = "config.json"
PARAMS_FILE = "params.json"

# ViralFlow checkout
DEFAULT_REPO_DIRNAME = "ViralFlow"
MICROMAMBA_ENV = "viralflow"

# locales
SUPPORTED_LOCALES = ("en", "pt-BR")
FALLBACK_LOCALE = "en"

# log chunk kinds
KIND_STDOUT = "stdout"
KIND_STDERR = "stderr"

# pangolin update modes
PANGOLIN_MODES = ("toolAndData", "dataOnly")

# results viewer
IMAGE_EXTS = {"png", "jpg", "jpeg", "gif", "bmp", "webp", "svg"}
HTML_EXTS = {"html", "htm"}
TABLE_EXTS = {"csv", "tsv"}
TABLE_PREVIEW_ROWS = 200
