from PyQt5.QtGui import QColor, QPainter


def alpha_at(image, x, y):
    return image.pixelColor(x, y).alpha()


def color_at(image, x, y):
    return image.pixelColor(x, y)


def paint_rect(image, x, y, w, h, color="#0000FF"):
    painter = QPainter(image)
    painter.fillRect(x, y, w, h, QColor(color))
    painter.end()
