from hlsstitch.core.config import HLSStitchConf

settings = HLSStitchConf()
