"""Baseline NDVI resolution: previous season first, historical mean second."""

from __future__ import annotations

from dataclasses import dataclass

from fieldsight.models.enums import BaselineTypeEnum
from fieldsight.repositories.base import SeasonRepository, SignalRepository


@dataclass(frozen=True, slots=True)
class Baseline:
	ndvi: float | None
	baseline_type: BaselineTypeEnum | None


NO_BASELINE = Baseline(ndvi=None, baseline_type=None)


class BaselineResolver:
	"""Selects the comparison NDVI for a field in a season.

	The previous season is the latest one starting strictly before the
	evaluated season; it only counts if the field has vegetation signals
	in it.  Otherwise the field's historical mean is used, which by default
	leaves out the evaluated season's own signals.
	"""

	def __init__(
		self,
		seasons: SeasonRepository,
		signals: SignalRepository,
		exclude_current_season: bool = True,
	):
		self.seasons = seasons
		self.signals = signals
		self.exclude_current_season = exclude_current_season

	async def resolve(self, field_id: str, season_id: str) -> Baseline:
		previous = await self.seasons.get_previous_season(season_id)
		if previous is not None:
			previous_mean = await self.signals.get_season_mean_ndvi(field_id, previous.id)
			if previous_mean is not None:
				return Baseline(ndvi=previous_mean, baseline_type=BaselineTypeEnum.previous_season)

		historical_mean = await self.signals.get_historical_mean_ndvi(
			field_id,
			exclude_season_id=season_id if self.exclude_current_season else None,
		)
		if historical_mean is not None:
			return Baseline(ndvi=historical_mean, baseline_type=BaselineTypeEnum.historical_mean)
		return NO_BASELINE
