from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

import pygame

from clusters_puzzle.game import Category, ClustersGame, GridSquare, LayoutRow, get_solved_squares


Rect = Tuple[int, int, int, int]
Color = Tuple[int, int, int]

BACKGROUND: Color = (26, 26, 46)
TEXT_PRIMARY: Color = (255, 255, 255)
TEXT_SECONDARY: Color = (160, 160, 160)
SQUARE_DEFAULT: Color = (45, 58, 90)
SQUARE_BORDER: Color = (61, 74, 106)
SELECTED: Color = (74, 144, 217)
SELECTED_BORDER: Color = (107, 179, 255)
ERROR: Color = (231, 76, 60)
OVERLAY = (0, 0, 0, 170)
PANEL: Color = (36, 40, 66)

# Green (easy) through orange and red to purple (hard)
DIFFICULTY_COLORS = {
    1: (46, 204, 113),
    2: (88, 214, 141),
    3: (130, 224, 170),
    4: (244, 208, 63),
    5: (245, 176, 65),
    6: (235, 152, 78),
    7: (230, 126, 34),
    8: (231, 76, 60),
    9: (192, 57, 43),
    10: (142, 68, 173),
}


def difficulty_color(difficulty: int) -> Color:
    return DIFFICULTY_COLORS.get(difficulty, SQUARE_DEFAULT)


PreviewTarget = Union[GridSquare, Category]


def preview_lines(target: PreviewTarget, items_per_category: int = 10) -> Tuple[str, str, Tuple[str, ...]]:
    """Title, progress line and items shown when a cluster or trophy is opened."""
    if isinstance(target, Category):
        title = f"{target.name}  -  difficulty {target.difficulty}"
    else:
        title = "Cluster Contents"
    return title, f"{len(target.items)} of {items_per_category} items", tuple(target.items)


def compute_square_rects(rows: Sequence[LayoutRow], x0: int, y0: int, width: int,
                         row_height: int, gap: int) -> List[Tuple[str, Rect]]:
    """Pixel boxes for every square, widths proportional to item counts."""
    rects: List[Tuple[str, Rect]] = []
    for row_index, row in enumerate(rows):
        y = y0 + row_index * row_height
        x = float(x0)
        for square in row.squares:
            w = row.width_fraction(square) * width
            left = int(round(x))
            right = int(round(x + w))
            rects.append((square.id, (left, y, max(1, right - left - gap), row_height - gap)))
            x += w
    return rects


class Renderer:
    def __init__(self, width: int = 560, row_height: int = 44, trophy_height: int = 26,
                 margin: int = 16, gap: int = 4, header_height: int = 36) -> None:
        self.width = width
        self.row_height = row_height
        self.trophy_height = trophy_height
        self.margin = margin
        self.gap = gap
        self.header_height = header_height

    def window_size(self, game: ClustersGame) -> Tuple[int, int]:
        rules = game.rules
        max_rows = rules.total_items // game.config.target_items_per_row
        height = (self.margin * 2 + self.header_height
                  + rules.categories_per_puzzle * (self.trophy_height + self.gap)
                  + max_rows * self.row_height)
        return self.width + self.margin * 2, height

    def _grid_top(self, game: ClustersGame) -> int:
        solved = len(game.state.solved_category_ids)
        return self.margin + self.header_height + solved * (self.trophy_height + self.gap)

    def square_rects(self, game: ClustersGame) -> List[Tuple[str, Rect]]:
        return compute_square_rects(game.layout_rows(), self.margin, self._grid_top(game),
                                    self.width, self.row_height, self.gap)

    def hit_test(self, game: ClustersGame, pos: Tuple[int, int]) -> Optional[str]:
        px, py = pos
        for square_id, (x, y, w, h) in self.square_rects(game):
            if x <= px < x + w and y <= py < y + h:
                return square_id
        return None

    def trophy_rects(self, game: ClustersGame) -> List[Tuple[str, Rect]]:
        """Category id and box of each solved trophy, stacked above the grid."""
        rects: List[Tuple[str, Rect]] = []
        y = self.margin + self.header_height
        for square in get_solved_squares(game.state.grid):
            rects.append((square.category_id, (self.margin, y, self.width, self.trophy_height)))
            y += self.trophy_height + self.gap
        return rects

    def hit_test_trophy(self, game: ClustersGame, pos: Tuple[int, int]) -> Optional[str]:
        px, py = pos
        for category_id, (x, y, w, h) in self.trophy_rects(game):
            if x <= px < x + w and y <= py < y + h:
                return category_id
        return None

    def preview_target(self, game: ClustersGame, pos: Tuple[int, int]) -> Optional[PreviewTarget]:
        """The trophy or multi-item cluster under `pos`; single items have nothing to preview."""
        category_id = self.hit_test_trophy(game, pos)
        if category_id is not None:
            return game.get_category_by_id(category_id)
        square_id = self.hit_test(game, pos)
        if square_id is None:
            return None
        square = game.get_square_by_id(square_id)
        if square is None or square.size < 2:
            return None
        return square

    def _draw_trophies(self, screen: pygame.Surface, game: ClustersGame, font: pygame.font.Font) -> None:
        for category_id, box in self.trophy_rects(game):
            category = game.get_category_by_id(category_id)
            if category is None:
                continue
            rect = pygame.Rect(box)
            pygame.draw.rect(screen, difficulty_color(category.difficulty), rect, border_radius=6)
            label = font.render(f"{category.name}  -  difficulty {category.difficulty}", True, TEXT_PRIMARY)
            screen.blit(label, label.get_rect(center=rect.center))

    def _draw_square(self, screen: pygame.Surface, game: ClustersGame, square_id: str, box: Rect,
                     font: pygame.font.Font, shake_offset: int) -> None:
        square = game.get_square_by_id(square_id)
        if square is None:
            return
        x, y, w, h = box
        fill, border = SQUARE_DEFAULT, SQUARE_BORDER
        if game.is_square_selected(square_id):
            fill, border = SELECTED, SELECTED_BORDER
        if game.is_square_shaking(square_id):
            border = ERROR
            x += shake_offset
        rect = pygame.Rect(x, y, w, h)
        pygame.draw.rect(screen, fill, rect, border_radius=6)
        pygame.draw.rect(screen, border, rect, 2, border_radius=6)

        text = square.items[0] if square.size == 1 else f"{square.size}: " + ", ".join(square.items)
        label = font.render(text, True, TEXT_PRIMARY)
        if label.get_width() > w - 8:
            label = font.render(f"{square.size} items", True, TEXT_PRIMARY)
        screen.blit(label, label.get_rect(center=rect.center))

    def draw_preview(self, screen: pygame.Surface, game: ClustersGame, target: PreviewTarget,
                     font: pygame.font.Font) -> pygame.Rect:
        """Modal panel listing every item of a cluster or solved category."""
        title, progress, items = preview_lines(target, game.rules.items_per_category)
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill(OVERLAY)
        screen.blit(shade, (0, 0))

        line = font.get_linesize() + 4
        panel_w = min(screen.get_width() - self.margin * 2, 320)
        panel_h = line * (len(items) + 4) + self.margin * 2
        panel = pygame.Rect(0, 0, panel_w, panel_h)
        panel.center = screen.get_rect().center
        border = difficulty_color(target.difficulty) if isinstance(target, Category) else SELECTED_BORDER
        pygame.draw.rect(screen, PANEL, panel, border_radius=10)
        pygame.draw.rect(screen, border, panel, 2, border_radius=10)

        x, y = panel.left + self.margin, panel.top + self.margin
        screen.blit(font.render(title, True, TEXT_PRIMARY), (x, y))
        y += line
        screen.blit(font.render(progress, True, TEXT_SECONDARY), (x, y))
        y += line * 2
        for item in items:
            screen.blit(font.render(item, True, TEXT_PRIMARY), (x, y))
            y += line
        screen.blit(font.render("Click or ESC to close", True, TEXT_SECONDARY), (x, y))
        return panel

    def draw(self, screen: pygame.Surface, game: ClustersGame, font: pygame.font.Font,
             shake_offset: int = 0, preview: Optional[PreviewTarget] = None) -> None:
        screen.fill(BACKGROUND)
        state = game.state
        status = (f"Mistakes: {state.mistakes}   "
                  f"Solved: {len(state.solved_category_ids)}/{game.rules.categories_per_puzzle}   "
                  f"Time: {int(game.elapsed_time())}s")
        screen.blit(font.render(status, True, TEXT_SECONDARY), (self.margin, self.margin))

        self._draw_trophies(screen, game, font)
        for square_id, box in self.square_rects(game):
            self._draw_square(screen, game, square_id, box, font, shake_offset)

        if state.is_won:
            banner = font.render(f"Solved in {int(game.elapsed_time())}s with {state.mistakes} mistakes - "
                                 "press R to play again", True, TEXT_PRIMARY)
            screen.blit(banner, banner.get_rect(center=(screen.get_width() // 2, screen.get_height() - self.margin * 2)))
        if preview is not None:
            self.draw_preview(screen, game, preview, font)
        pygame.display.flip()
