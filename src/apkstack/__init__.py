"""apkstack - detect the tech stack of decompiled Android apps."""

__version__ = "0.1.0"
