"""草稿板：在螢幕上任何東西之上自由畫記的透明畫布。"""

__version__ = "0.1.0"
