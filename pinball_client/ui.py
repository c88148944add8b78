import pygame


class Button:
    def __init__(self, rect, text, font, bg, fg):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.fg = fg

    def draw(self, surface):
        pygame.draw.rect(surface, self.bg, self.rect, border_radius=10)
        pygame.draw.rect(surface, (0, 0, 0), self.rect, width=2, border_radius=10)
        txt = self.font.render(self.text, True, self.fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))

    def is_clicked(self, event):
        return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos)


class Slider:
    """Horizontal slider bound to one named physics parameter."""

    def __init__(self, rect, font, label, name, lo, hi, fmt="{:.2f}"):
        self.rect = pygame.Rect(rect)
        self.font = font
        self.label = label
        self.name = name
        self.lo = float(lo)
        self.hi = float(hi)
        self.fmt = fmt
        self.dragging = False

    def value_at(self, x):
        frac = (x - self.rect.left) / max(1, self.rect.width)
        frac = max(0.0, min(1.0, frac))
        return self.lo + frac * (self.hi - self.lo)

    def handle_event(self, event, config):
        # returns True when the config was changed
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.dragging = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False

        if self.dragging and event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION):
            return config.update(self.name, self.value_at(event.pos[0]))
        return False

    def draw(self, surface, config):
        value = getattr(config, self.name)
        label = self.font.render(f"{self.label}: {self.fmt.format(value)}", True, (235, 235, 235))
        surface.blit(label, (self.rect.x, self.rect.y - 22))

        pygame.draw.rect(surface, (60, 60, 80), self.rect, border_radius=6)
        frac = (value - self.lo) / max(1e-9, self.hi - self.lo)
        fill = self.rect.copy()
        fill.width = int(self.rect.width * max(0.0, min(1.0, frac)))
        pygame.draw.rect(surface, (78, 205, 196), fill, border_radius=6)
        knob_x = self.rect.x + fill.width
        pygame.draw.circle(surface, (245, 245, 245), (knob_x, self.rect.centery), self.rect.height // 2 + 3)
